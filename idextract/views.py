import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .helpers.doc_extract import extract_document_data
from .helpers.exceptions import DocumentExtractionError

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def upload(request: HttpRequest):
    """OCR the uploaded ``file`` and return the fields for ``documentType``."""
    uploaded = request.FILES.get('file')
    if uploaded is None:
        return JsonResponse({'error': 'No file uploaded'}, status=400)
    document_type = request.POST.get('documentType', '')

    try:
        extracted_info = extract_document_data(uploaded.read(), document_type)
    except DocumentExtractionError as e:
        logger.error(f"Error processing file {uploaded.name}: {e}")
        return JsonResponse({'error': 'Error processing file', 'details': str(e)}, status=500)
    return JsonResponse(extracted_info)
