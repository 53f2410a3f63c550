"""URL configuration for invoice-builder project."""
from django.http import JsonResponse
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from strawberry.django.views import GraphQLView

from apps.invoices.views import InvoiceDefaultsView, InvoicePdfView, InvoiceTotalsView
from .schema import schema


def health_check(request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("graphql", csrf_exempt(GraphQLView.as_view(schema=schema))),
    path("api/health", health_check),
    path("api/invoices/defaults/", InvoiceDefaultsView.as_view(), name="invoice-defaults"),
    path("api/invoices/totals/", InvoiceTotalsView.as_view(), name="invoice-totals"),
    path("api/invoices/pdf/", InvoicePdfView.as_view(), name="invoice-pdf"),
]
