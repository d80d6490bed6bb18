"""Extract schedule text from a PDF with PyMuPDF.

Produces the same shape the parsers expect from any upstream extractor:
each page's text followed by a "-- N of M --" page-break marker.
"""

import fitz


def extract_text(pdf_path: str) -> str:
    """Return the text of every page, separated by page-break markers."""
    doc = fitz.open(pdf_path)
    try:
        total = doc.page_count
        parts = []
        for page_num in range(total):
            page = doc[page_num]
            parts.append(page.get_text("text", sort=True).strip())
            parts.append(f'-- {page_num + 1} of {total} --')
    finally:
        doc.close()
    return '\n\n'.join(parts) + '\n'


def read_schedule_text(data_path: str) -> str:
    """Load schedule text from a .pdf (via PyMuPDF) or an already-extracted text file."""
    if data_path.lower().endswith('.pdf'):
        return extract_text(data_path)
    with open(data_path, 'r', encoding='utf-8') as f:
        return f.read()
