"""Root GraphQL schema."""
import strawberry

from apps.invoices.schema import InvoiceQuery


@strawberry.type
class Query(InvoiceQuery):
    @strawberry.field
    def health(self) -> str:
        return "ok"


schema = strawberry.Schema(query=Query)
