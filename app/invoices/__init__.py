from app.invoices.renderer import (  # noqa: F401
    build_payment_invoice,
    format_money,
    invoice_number,
    list_templates,
    render_invoice,
)
