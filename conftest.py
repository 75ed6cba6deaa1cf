"""Shared pytest fixtures for the poster tests."""
import io

import pytest
from PIL import Image, ImageDraw
from reportlab.pdfgen import canvas


@pytest.fixture
def make_png(tmp_path):
    """Factory fixture: make_png(width, height, color, name) -> path of a PNG file."""
    def _make(width, height, color='red', name='input.png'):
        img = Image.new('RGB', (width, height), color)
        draw = ImageDraw.Draw(img)
        draw.line([(0, 0), (width - 1, height - 1)], fill='black', width=3)
        path = tmp_path / name
        img.save(path, format='PNG')
        return path
    return _make


@pytest.fixture
def make_pdf(tmp_path):
    """Factory fixture: make_pdf(width_pt, height_pt, pages) -> path of a PDF file."""
    def _make(width_pt=200, height_pt=100, pages=1, name='input.pdf'):
        path = tmp_path / name
        c = canvas.Canvas(str(path), pagesize=(width_pt, height_pt))
        for n in range(pages):
            c.setFillColorRGB(0, 0, 1)
            c.rect(10, 10, width_pt / 2, height_pt / 2, fill=1)
            c.drawString(20, height_pt - 20, f"page {n + 1}")
            c.showPage()
        c.save()
        return path
    return _make


@pytest.fixture
def sample_image():
    """A 400x300 in-memory RGB image with a circle, for rendering tests."""
    img = Image.new('RGB', (400, 300), 'white')
    draw = ImageDraw.Draw(img)
    draw.ellipse([50, 20, 350, 280], fill='red', outline='black')
    return img


@pytest.fixture
def pdf_buffer():
    return io.BytesIO()
