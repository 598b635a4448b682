import io

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

COLUMNS = (
    ("#", 2.0),
    ("Team", 3.0),
    ("P", 10.5),
    ("W", 11.7),
    ("D", 12.9),
    ("L", 14.1),
    ("GF", 15.3),
    ("GA", 16.5),
    ("GD", 17.7),
    ("Pts", 18.9),
)


def standings_pdf(standings, title: str = "League Table") -> io.BytesIO:
    """Render the league table as a one-or-more page A4 PDF."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    y = height - 2 * cm

    pdf.setFont("Helvetica-Bold", 16)
    pdf.drawCentredString(width / 2, y, title)
    y -= 30

    def header(y):
        pdf.setFont("Helvetica-Bold", 10)
        for label, x in COLUMNS:
            pdf.drawString(x * cm, y, label)
        pdf.setFont("Helvetica", 10)
        return y - 18

    y = header(y)

    for position, row in enumerate(standings, start=1):
        if y < 2 * cm:
            pdf.showPage()
            y = header(height - 2 * cm)

        values = (
            position, row.name, row.played, row.won, row.drawn, row.lost,
            row.goals_for, row.goals_against, row.goal_difference, row.points,
        )
        for (_, x), value in zip(COLUMNS, values):
            pdf.drawString(x * cm, y, str(value))
        y -= 15

    pdf.save()
    buffer.seek(0)
    return buffer
