# docgen/management/commands/seed_document_templates.py
from django.core.management.base import BaseCommand

from docgen.services.templates import seed_global_templates


class Command(BaseCommand):
    help = "Create the global document templates (proposal, contract, invoice, report) if missing."

    def add_arguments(self, parser):
        parser.add_argument(
            '--refresh', action='store_true',
            help="Overwrite content and variables of global templates that already exist.",
        )

    def handle(self, *args, **options):
        results = seed_global_templates(refresh=options['refresh'])

        self.stdout.write("Global templates ensured:")
        for template, created in results:
            if created:
                state = 'created'
            elif options['refresh']:
                state = 'refreshed'
            else:
                state = 'already existed'
            self.stdout.write(f" - {template.name}: {state}")
        self.stdout.write(self.style.SUCCESS("Done."))
