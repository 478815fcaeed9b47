"""
PDF reports for calculator results.

Uses fpdf2 (pure Python, no system dependencies). Reports are built from the
same result dicts the calculator endpoints return, so a report always matches
what the user saw on screen.

Loan report sections:
1. Header + loan details
2. Summary (EMI, totals, principal/interest split)
3. Amortization schedule
4. Notes

Carbon footprint report sections:
1. Header + farm details
2. Summary (total, per hectare, rating)
3. Emissions breakdown
4. Reduction recommendations
"""

from datetime import datetime

from fpdf import FPDF

from .config import settings

FREQUENCY_NAMES = {
    "monthly": "Monthly",
    "quarterly": "Quarterly",
    "half-yearly": "Half-yearly",
    "yearly": "Yearly",
}


def _fmt(amount) -> str:
    """Format a number as currency with thousands separators."""
    try:
        return f"{settings.CURRENCY_SYMBOL} {float(amount):,.2f}"
    except (ValueError, TypeError):
        return f"{settings.CURRENCY_SYMBOL} 0.00"


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("₹", "Rs.")  # rupee sign
        .replace("•", "-")    # bullet
        .replace("—", " - ")  # em dash
        .replace("–", "-")    # en dash
        .replace("‘", "'")
        .replace("’", "'")
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class ReportPDF(FPDF):
    """Shared layout for calculator reports."""

    def __init__(self, title: str):
        super().__init__()
        self.report_title = title
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(46, 125, 50)
        self.cell(0, 6, _safe(settings.APP_NAME), new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def title_block(self, subtitle: str = ""):
        self.set_font("Helvetica", "B", 18)
        self.cell(0, 10, _safe(self.report_title), new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "", 9)
        self.set_text_color(100, 100, 100)
        generated = datetime.utcnow().strftime("%B %d, %Y")
        self.cell(0, 5, _safe(f"Generated {generated}. {subtitle}".strip()), new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(4)

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(46, 125, 50)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {_safe(title)}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def key_value(self, label, value):
        self.set_font("Helvetica", "", 9)
        self.cell(60, 5.5, _safe(label))
        self.set_font("Helvetica", "B", 9)
        self.cell(0, 5.5, _safe(value), new_x="LMARGIN", new_y="NEXT")

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for i, (label, width) in enumerate(cols):
            self.cell(width, 6, _safe(label), border="B", fill=True, align="L" if i == 0 else "R")
        self.ln()

    def table_row(self, values, widths, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            self.cell(width, 5.5, _safe(val), align="L" if i == 0 else "R")
        self.ln()

    def bullet_list(self, items):
        self.set_font("Helvetica", "", 9)
        for item in items:
            self.multi_cell(0, 5, _safe(f"- {item}"), new_x="LMARGIN", new_y="NEXT")


def generate_loan_report(result: dict) -> bytes:
    """PDF for a LoanCalculator result dict."""
    details = result["loan_details"]
    pdf = ReportPDF("Loan Repayment Plan")
    pdf.alias_nb_pages()
    pdf.add_page()
    pdf.title_block()

    pdf.section_header("Loan Details")
    if details.get("loan_type"):
        pdf.key_value("Loan type", details["loan_type"].upper())
    pdf.key_value("Principal", _fmt(details["principal"]))
    pdf.key_value("Interest rate", f"{details['interest_rate']:.2f}% per year")
    pdf.key_value("Tenure", f"{details['tenure']} months")
    pdf.key_value("Payment frequency", FREQUENCY_NAMES.get(details["payment_frequency"], details["payment_frequency"]))
    pdf.ln(3)

    pdf.section_header("Summary")
    pdf.key_value("Installment (EMI)", _fmt(result["emi"]))
    pdf.key_value("Number of payments", str(result["number_of_payments"]))
    pdf.key_value("Total interest", _fmt(result["total_interest"]))
    pdf.key_value("Total payment", _fmt(result["total_payment"]))
    pdf.ln(3)

    pdf.section_header("Amortization Schedule")
    cols = [("#", 20), ("Payment", 42), ("Principal", 42), ("Interest", 42), ("Balance", 44)]
    widths = [w for _, w in cols]
    pdf.table_header(cols)
    for row in result["amortization_schedule"]:
        pdf.table_row([
            str(row["payment_number"]),
            f"{row['payment_amount']:,.2f}",
            f"{row['principal_payment']:,.2f}",
            f"{row['interest_payment']:,.2f}",
            f"{row['remaining_principal']:,.2f}",
        ], widths)
    pdf.table_row(["Total", f"{result['total_payment']:,.2f}", f"{details['principal']:,.2f}",
                   f"{result['total_interest']:,.2f}", ""], widths, bold=True)

    if result.get("assumptions"):
        pdf.ln(3)
        pdf.section_header("Notes")
        pdf.bullet_list(result["assumptions"])

    return bytes(pdf.output())


def generate_carbon_report(result: dict) -> bytes:
    """PDF for a CarbonFootprintCalculator result dict."""
    pdf = ReportPDF("Farm Carbon Footprint")
    pdf.alias_nb_pages()
    pdf.add_page()
    crop = (result.get("crop_type") or "").title()
    pdf.title_block(f"Primary crop: {crop}." if crop else "")

    pdf.section_header("Summary")
    pdf.key_value("Farm size", f"{result['farm_size_hectares']:.2f} hectares")
    pdf.key_value("Total emissions", f"{result['total_emissions']:,.2f} kg CO2e")
    pdf.key_value("Per hectare", f"{result['emissions_per_hectare']:,.2f} kg CO2e/ha")
    pdf.key_value("Rating", result["rating"]["label"])
    pdf.ln(3)

    pdf.section_header("Emissions Breakdown")
    cols = [("Source", 90), ("kg CO2e", 50), ("Share", 50)]
    widths = [w for _, w in cols]
    pdf.table_header(cols)
    for entry in result["breakdown"]:
        pdf.table_row([entry["name"], f"{entry['value']:,.2f}", f"{entry['percentage']:.1f}%"], widths)
    pdf.ln(3)

    pdf.section_header("Reduction Recommendations")
    for rec in result["recommendations"]:
        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(0, 6, _safe(f"{rec['source']} (potential reduction {rec['potential_reduction']})"),
                 new_x="LMARGIN", new_y="NEXT")
        pdf.bullet_list(rec["recommendations"])
        pdf.ln(1)

    if result.get("assumptions"):
        pdf.section_header("Notes")
        pdf.bullet_list(result["assumptions"])

    return bytes(pdf.output())
