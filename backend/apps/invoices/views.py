"""REST views for the invoice form: defaults, live totals and PDF download."""
import json

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.invoices.defaults import default_invoice
from apps.invoices.delivery import ArtifactDelivery, HttpDownloadDelivery
from apps.invoices.services import LABELS, InvoiceRenderer, RenderFailure
from apps.invoices.totals import calculate_draft_totals, serialize_totals
from apps.invoices.types import PAYMENT_TERMS
from apps.invoices.validation import InvoiceValidationError, validate_invoice


def _parse_json_body(request):
    """Return the decoded JSON object body, or None if it is not one."""
    try:
        payload = json.loads(request.body or b"")
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


class InvoiceDefaultsView(View):
    """REST endpoint returning the starting values of a new invoice form."""

    def get(self, request):
        return JsonResponse(
            {
                "invoice": default_invoice(),
                "paymentTerms": list(PAYMENT_TERMS),
            }
        )


@method_decorator(csrf_exempt, name="dispatch")
class InvoiceTotalsView(View):
    """REST endpoint computing live totals for a form that is still being edited."""

    def post(self, request):
        payload = _parse_json_body(request)
        if payload is None:
            return JsonResponse({"error": "Request body must be a JSON object"}, status=400)

        return JsonResponse(serialize_totals(calculate_draft_totals(payload)))


@method_decorator(csrf_exempt, name="dispatch")
class InvoicePdfView(View):
    """REST endpoint validating a submitted invoice and returning it as PDF."""

    delivery_class: type[ArtifactDelivery] = HttpDownloadDelivery

    def post(self, request):
        """
        Render the submitted invoice.

        Query parameters:
            language: "en" or "de" (optional, default from settings)

        Returns:
            PDF download on success, JSON error otherwise.
        """
        payload = _parse_json_body(request)
        if payload is None:
            return JsonResponse({"error": "Request body must be a JSON object"}, status=400)

        try:
            record = validate_invoice(payload)
        except InvoiceValidationError as e:
            return JsonResponse(
                {"error": "Validation failed", "violations": e.as_dict()},
                status=400,
            )

        language = request.GET.get("language") or None
        if language is not None and language not in LABELS:
            language = None

        renderer = InvoiceRenderer(language=language)
        try:
            content = renderer.generate_pdf(record)
        except RenderFailure:
            return JsonResponse(
                {"error": "Error generating PDF. Please try again."}, status=500
            )

        return self.delivery_class().deliver(
            content, renderer.filename_for(record), renderer.content_type
        )
