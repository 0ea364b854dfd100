from app.services.converters.base import BaseConverter
from app.services.converters.document_to_pdf import DocumentToPdfConverter
from app.services.converters.image import ImageConverter
from app.services.converters.passthrough import PassthroughConverter
from app.services.converters.pdf_to_images import PdfToImagesConverter
from app.services.converters.spreadsheet import CsvToXlsxConverter, XlsxToCsvConverter

__all__ = [
    "BaseConverter",
    "DocumentToPdfConverter",
    "XlsxToCsvConverter",
    "CsvToXlsxConverter",
    "ImageConverter",
    "PdfToImagesConverter",
    "PassthroughConverter",
]
