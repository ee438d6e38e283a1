from pathlib import Path
from typing import List

import pdfplumber
import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def write_pdf(path: Path, label: str, pages: int = 1) -> Path:
    """Write a small PDF whose pages read '<label> page <n>'."""
    path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(path), pagesize=A4)
    for i in range(1, pages + 1):
        c.drawString(72, 720, f"{label} page {i}")
        c.showPage()
    c.save()
    return path


def page_texts(path: Path) -> List[str]:
    with pdfplumber.open(str(path)) as pdf:
        return [(page.extract_text() or "").strip() for page in pdf.pages]


@pytest.fixture
def make_pdf():
    return write_pdf


@pytest.fixture
def read_pages():
    return page_texts
