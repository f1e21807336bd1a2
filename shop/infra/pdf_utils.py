import io
from typing import Iterable

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from shop.domain.LineItem import LineItem
from shop.domain.OrderSummary import OrderSummary
from shop.domain.Province import Jurisdiction, tax_description
from shop.domain.ShoppingList import ShoppingList
from shop.logic.shopping.summary import group_items_by_category
from shop.logic.tax.classifier import is_taxable
from shop.utilities.currency import budget_message, format_price


def generate_pdf_for_list(shopping_list: ShoppingList, items: Iterable[LineItem],
                          summary: OrderSummary, jurisdiction: Jurisdiction) -> bytes:
    """Render a list as a table grouped by category, followed by the tax and budget summary."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Shopping List - {shopping_list.name}", styles["Title"]),
        Paragraph(f"{summary.purchased_count}/{summary.item_count} items purchased "
                  f"({summary.percent_complete}%)", styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [["", "Item", "Qty", "Price", "Line total", "Tax"]]
    for category, group in group_items_by_category(items).items():
        data.append([category, "", "", "", "", ""])
        for item in group:
            data.append([
                "x" if item.is_purchased else "",
                item.name,
                str(item.quantity),
                format_price(item.price),
                format_price(item.line_total),
                "+tax" if is_taxable(item.category_name) else "",
            ])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (2,0), (-1,-1), "RIGHT"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))
    elements.append(table)
    elements.append(Spacer(1, 16))

    totals = [
        ["Subtotal", format_price(summary.subtotal)],
        [f"Tax ({tax_description(jurisdiction)})", format_price(summary.tax_amount)],
        ["Total", format_price(summary.total)],
    ]
    if shopping_list.budget is not None:
        totals.append([f"Budget: {format_price(shopping_list.budget)}", budget_message(summary.budget_variance)])
    totals_table = Table(totals, hAlign="RIGHT")
    totals_table.setStyle(TableStyle([
        ("ALIGN", (1,0), (1,-1), "RIGHT"),
        ("FONTNAME", (0,2), (-1,2), "Helvetica-Bold"),
        ("LINEABOVE", (0,2), (-1,2), 0.5, colors.grey),
    ]))
    elements.append(totals_table)

    doc.build(elements)
    return buf.getvalue()
