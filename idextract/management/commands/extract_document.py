import json

from django.core.management.base import BaseCommand, CommandError

from idextract.helpers.doc_extract import extract_details_from_text, extract_document_data
from idextract.helpers.exceptions import DocumentExtractionError
from idextract.models import DocumentTypes


class Command(BaseCommand):
    help = 'Extract name, document number and dates from an identity document image, PDF or raw OCR text.'

    def add_arguments(self, parser):
        parser.add_argument('source', help='Path to an image/PDF, or raw OCR text when --text is given')
        parser.add_argument(
            '--type',
            dest='document_type',
            default=DocumentTypes.PASSPORT.value,
            help=f"Document type ({', '.join(DocumentTypes.values)})",
        )
        parser.add_argument('--text', action='store_true', help='Treat SOURCE as raw OCR text and skip OCR')

    def handle(self, *args, **options):
        source = options['source']
        document_type = options['document_type']

        if options['text']:
            record = extract_details_from_text(source, document_type)
        else:
            try:
                with open(source, 'rb') as fh:
                    file_content = fh.read()
            except OSError as e:
                raise CommandError(f'Could not read {source}: {e}')
            try:
                record = extract_document_data(file_content, document_type)
            except DocumentExtractionError as e:
                raise CommandError(f'Error processing file: {e}')

        self.stdout.write(json.dumps(record, indent=2, ensure_ascii=False))
