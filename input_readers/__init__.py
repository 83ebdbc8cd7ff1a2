from .image import bytes_to_data_url, guess_mime_type
from .ocr import OcrError, OcrWorker
