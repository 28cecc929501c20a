"""
Visual themes for the invoice template.

A theme only carries presentation: stylesheet, per-cell inline styles,
labels and a few layout switches. The data contract is the same for all.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class InvoiceTheme:
    id: str
    name: str
    description: str
    preview: str
    stylesheet: str
    # Layout switches
    boxed: bool = False  # wrap the page in .container
    split_header: bool = False  # title block and issuer side by side
    meta_style: str = "inline"  # 'lines', 'compact' or 'inline'
    detail_lines: bool = False  # issuer/bill-to details as separate divs instead of <br> runs
    uppercase_payment_type: bool = False
    emphasize_gstin_label: bool = False
    # Inline styles for table cells
    cell_style: str = ""
    muted_cell_style: str = ""
    amount_cell_style: str = ""
    name_style: str = ""  # style of the <strong> client/project names
    # Labels
    bill_to_label: str = "Bill To"
    project_label: str = "Project"
    total_label: str = "Project Total:"
    paid_label: str = "Paid:"
    remaining_label: str = "Remaining:"
    total_value_style: str = ""
    paid_value_style: str = ""
    remaining_value_style: str = ""
    notes_border: str = ""
    footer_lines: List[str] = field(default_factory=list)
    footer_first_line_style: str = ""


CLASSIC = InvoiceTheme(
    id="classic",
    name="Classic",
    description="Traditional invoice layout with clear sections",
    preview="Traditional design with structured layout",
    stylesheet="""
          body { font-family: Arial, sans-serif; margin: 40px; color: #111827; }
          .header { display: flex; justify-content: space-between; border-bottom: 2px solid #d1d5db; padding-bottom: 20px; margin-bottom: 30px; }
          .invoice-title { font-size: 32px; font-weight: bold; margin-bottom: 10px; }
          .company-info { text-align: right; }
          .company-name { font-size: 20px; font-weight: 600; margin-bottom: 10px; }
          .bill-to { display: grid; grid-template-columns: 1fr 1fr; gap: 30px; margin-bottom: 30px; }
          .section-title { font-size: 14px; font-weight: 600; color: #374151; margin-bottom: 8px; }
          table { width: 100%; border-collapse: collapse; margin-bottom: 30px; }
          th { background-color: #f9fafb; padding: 12px; text-align: left; font-weight: 600; font-size: 14px; color: #374151; border-bottom: 1px solid #e5e7eb; }
          td { padding: 12px; border-bottom: 1px solid #e5e7eb; font-size: 14px; }
          .totals { display: flex; justify-content: flex-end; margin-bottom: 30px; }
          .totals-table { width: 320px; }
          .totals-row { display: flex; justify-content: space-between; padding: 8px 0; font-size: 14px; }
          .total-final { border-top: 2px solid #d1d5db; padding-top: 12px; font-weight: bold; font-size: 16px; }
          .footer { border-top: 1px solid #e5e7eb; padding-top: 20px; text-align: center; font-size: 12px; color: #6b7280; }
          @media print { body { margin: 20px; } .no-print { display: none; } }""",
    split_header=True,
    meta_style="lines",
    detail_lines=True,
    cell_style="padding: 12px; border-bottom: 1px solid #e5e7eb;",
    muted_cell_style="padding: 12px; border-bottom: 1px solid #e5e7eb;",
    amount_cell_style="padding: 12px; border-bottom: 1px solid #e5e7eb; text-align: right;",
    bill_to_label="Bill To:",
    project_label="Project:",
    total_label="Project Total Amount:",
    paid_label="Total Paid Amount:",
    remaining_label="Remaining Amount:",
    total_value_style="font-weight: 600;",
    paid_value_style="font-weight: 600; color: #059669;",
    remaining_value_style="color: #ea580c;",
    notes_border="1px solid #e5e7eb",
    footer_lines=["Thank you for your business!", "Generated by {app_name} - Client Management System"],
)

MINIMAL = InvoiceTheme(
    id="minimal",
    name="Minimal",
    description="Clean and simple design, perfect for modern businesses",
    preview="Clean lines and minimal styling",
    stylesheet="""
          body { font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif; margin: 60px; color: #1f2937; background: #ffffff; }
          .header { margin-bottom: 50px; }
          .invoice-title { font-size: 24px; font-weight: 300; letter-spacing: 2px; margin-bottom: 8px; color: #111827; }
          .invoice-number { font-size: 12px; color: #6b7280; margin-top: 4px; }
          .company-info { text-align: right; margin-top: 30px; }
          .company-name { font-size: 18px; font-weight: 500; margin-bottom: 8px; }
          .company-detail { font-size: 12px; color: #6b7280; line-height: 1.6; }
          .bill-to { display: grid; grid-template-columns: 1fr 1fr; gap: 60px; margin-bottom: 50px; }
          .section-title { font-size: 11px; font-weight: 600; text-transform: uppercase; letter-spacing: 1px; color: #9ca3af; margin-bottom: 12px; }
          .section-content { font-size: 14px; line-height: 1.8; }
          table { width: 100%; border-collapse: collapse; margin-bottom: 40px; }
          th { padding: 12px 0; text-align: left; font-weight: 500; font-size: 11px; text-transform: uppercase; letter-spacing: 1px; color: #9ca3af; border-bottom: 1px solid #f3f4f6; }
          td { padding: 16px 0; border-bottom: 1px solid #f3f4f6; font-size: 14px; }
          .totals { display: flex; justify-content: flex-end; margin-bottom: 40px; }
          .totals-table { width: 280px; }
          .totals-row { display: flex; justify-content: space-between; padding: 10px 0; font-size: 14px; }
          .total-final { border-top: 2px solid #1f2937; padding-top: 16px; margin-top: 8px; font-weight: 600; font-size: 16px; }
          .footer { border-top: 1px solid #f3f4f6; padding-top: 30px; text-align: center; font-size: 11px; color: #9ca3af; }
          @media print { body { margin: 40px; } }""",
    meta_style="compact",
    cell_style="padding: 16px 0; border-bottom: 1px solid #f3f4f6;",
    muted_cell_style="padding: 16px 0; border-bottom: 1px solid #f3f4f6; color: #9ca3af;",
    amount_cell_style="padding: 16px 0; border-bottom: 1px solid #f3f4f6; text-align: right; font-weight: 500;",
    notes_border="1px solid #f3f4f6",
    footer_lines=["Thank you for your business"],
)

PROFESSIONAL = InvoiceTheme(
    id="professional",
    name="Professional",
    description="Bold and professional with strong visual hierarchy",
    preview="Bold headers and professional styling",
    stylesheet="""
          body { font-family: 'Georgia', 'Times New Roman', serif; margin: 30px; color: #0f172a; background: #f8fafc; }
          .container { background: #ffffff; padding: 40px; box-shadow: 0 4px 6px rgba(0,0,0,0.1); }
          .header { border-bottom: 4px solid #1e293b; padding-bottom: 20px; margin-bottom: 30px; }
          .invoice-title { font-size: 42px; font-weight: bold; color: #1e293b; margin-bottom: 10px; }
          .invoice-meta { font-size: 14px; color: #475569; margin-top: 8px; }
          .company-info { text-align: right; margin-top: 20px; }
          .company-name { font-size: 24px; font-weight: bold; color: #1e293b; margin-bottom: 10px; }
          .company-detail { font-size: 13px; color: #475569; line-height: 1.8; }
          .bill-to { display: grid; grid-template-columns: 1fr 1fr; gap: 40px; margin-bottom: 35px; padding: 20px; background: #f1f5f9; }
          .section-title { font-size: 16px; font-weight: bold; color: #1e293b; margin-bottom: 12px; text-transform: uppercase; }
          .section-content { font-size: 14px; line-height: 1.8; color: #334155; }
          table { width: 100%; border-collapse: collapse; margin-bottom: 30px; border: 2px solid #1e293b; }
          th { background: #1e293b; color: #ffffff; padding: 16px; text-align: left; font-weight: bold; font-size: 13px; text-transform: uppercase; }
          td { padding: 14px; border-bottom: 2px solid #e5e7eb; background: #ffffff; font-size: 14px; }
          .totals { display: flex; justify-content: flex-end; margin-bottom: 30px; }
          .totals-table { width: 350px; background: #f1f5f9; padding: 20px; border: 2px solid #1e293b; }
          .totals-row { display: flex; justify-content: space-between; padding: 12px 0; font-size: 15px; font-weight: 500; }
          .total-final { border-top: 3px solid #1e293b; padding-top: 16px; margin-top: 8px; font-weight: bold; font-size: 18px; color: #1e293b; }
          .footer { border-top: 3px solid #1e293b; padding-top: 25px; text-align: center; font-size: 13px; color: #475569; font-weight: 500; }
          @media print { body { margin: 0; background: #fff; } .container { box-shadow: none; } }""",
    boxed=True,
    uppercase_payment_type=True,
    emphasize_gstin_label=True,
    cell_style="padding: 14px; border-bottom: 2px solid #e5e7eb; background: #ffffff;",
    muted_cell_style="padding: 14px; border-bottom: 2px solid #e5e7eb; background: #ffffff;",
    amount_cell_style="padding: 14px; border-bottom: 2px solid #e5e7eb; background: #ffffff; text-align: right; font-weight: 600;",
    project_label="Project Details",
    total_label="Project Total Amount:",
    paid_label="Total Paid Amount:",
    remaining_label="Remaining Amount:",
    paid_value_style="color: #059669;",
    remaining_value_style="color: #dc2626;",
    notes_border="2px solid #1e293b",
    footer_lines=["Thank you for your business!", "Generated by {app_name} - Client Management System"],
    footer_first_line_style="font-size: 16px; margin-bottom: 8px;",
)

ELEGANT = InvoiceTheme(
    id="elegant",
    name="Elegant",
    description="Sophisticated design with gradient accents",
    preview="Elegant colors and refined typography",
    stylesheet="""
          body { font-family: 'Playfair Display', 'Georgia', serif; margin: 0; color: #1f2937; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); padding: 40px; }
          .container { background: #ffffff; padding: 50px; max-width: 900px; margin: 0 auto; box-shadow: 0 20px 60px rgba(0,0,0,0.3); }
          .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; margin: -50px -50px 40px -50px; }
          .invoice-title { font-size: 48px; font-weight: 700; margin-bottom: 10px; letter-spacing: 2px; }
          .invoice-meta { font-size: 14px; opacity: 0.9; margin-top: 8px; }
          .company-info { text-align: right; margin-top: 25px; }
          .company-name { font-size: 22px; font-weight: 600; margin-bottom: 10px; }
          .company-detail { font-size: 13px; opacity: 0.9; line-height: 1.8; }
          .bill-to { display: grid; grid-template-columns: 1fr 1fr; gap: 50px; margin-bottom: 40px; padding: 30px; background: linear-gradient(135deg, #f3e8ff 0%, #e9d5ff 100%); border-radius: 8px; }
          .section-title { font-size: 14px; font-weight: 600; color: #7c3aed; margin-bottom: 12px; text-transform: uppercase; letter-spacing: 1px; }
          .section-content { font-size: 14px; line-height: 1.8; color: #4b5563; }
          table { width: 100%; border-collapse: collapse; margin-bottom: 35px; }
          th { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 16px; text-align: left; font-weight: 600; font-size: 13px; text-transform: uppercase; letter-spacing: 1px; }
          td { padding: 14px; border-bottom: 1px solid #e9d5ff; font-size: 14px; }
          .totals { display: flex; justify-content: flex-end; margin-bottom: 35px; }
          .totals-table { width: 320px; background: linear-gradient(135deg, #f3e8ff 0%, #e9d5ff 100%); padding: 25px; border-radius: 8px; }
          .totals-row { display: flex; justify-content: space-between; padding: 10px 0; font-size: 15px; }
          .total-final { border-top: 2px solid #7c3aed; padding-top: 16px; margin-top: 8px; font-weight: bold; font-size: 18px; color: #7c3aed; }
          .footer { border-top: 2px solid #e9d5ff; padding-top: 30px; text-align: center; font-size: 13px; color: #7c3aed; font-style: italic; }
          @media print { body { background: #fff; padding: 0; } .container { box-shadow: none; } .header { margin: 0 0 40px 0; } }""",
    boxed=True,
    cell_style="padding: 14px; border-bottom: 1px solid #e9d5ff;",
    muted_cell_style="padding: 14px; border-bottom: 1px solid #e9d5ff; color: #7c3aed;",
    amount_cell_style="padding: 14px; border-bottom: 1px solid #e9d5ff; text-align: right; font-weight: 600; color: #7c3aed;",
    name_style="color: #7c3aed;",
    paid_value_style="color: #059669;",
    notes_border="2px solid #e9d5ff",
    footer_lines=["Thank you for your business!", "Generated by {app_name}"],
    footer_first_line_style="font-size: 16px; margin-bottom: 8px; font-weight: 600;",
)

THEMES: Dict[str, InvoiceTheme] = {theme.id: theme for theme in (CLASSIC, MINIMAL, PROFESSIONAL, ELEGANT)}
DEFAULT_THEME = CLASSIC


def get_theme(template_id: str) -> InvoiceTheme:
    """Theme for `template_id`; unknown ids fall back to classic."""
    return THEMES.get(template_id, DEFAULT_THEME)
