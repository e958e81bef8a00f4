import asyncio
import json
import os

from django.conf import settings
from django.core.management.base import BaseCommand
from django.core.management.base import CommandError
from django.utils.translation import gettext as _

from student_hub.realtime.client import SnapshotStreamClient
from student_hub.realtime.client import StreamState
from student_hub.realtime.client import stream_target

KINDS = [
    "pending",
    "academics",
    "skills",
    "curricular",
    "extracurricular",
    "internships",
    "placements",
]


class Command(BaseCommand):
    help = _("Follow a live submissions stream and print every snapshot applied")

    def add_arguments(self, parser):
        parser.add_argument("kind", choices=KINDS)
        parser.add_argument("--sid", help="Student id, required for 'academics'")
        parser.add_argument(
            "--token",
            default=os.environ.get("STUDENT_HUB_TOKEN"),
            help="Bearer token (defaults to $STUDENT_HUB_TOKEN)",
        )
        parser.add_argument("--base-url", default=settings.PUBLIC_BASE_URL)
        parser.add_argument(
            "--max-updates",
            type=int,
            default=None,
            help="Stop after this many snapshots",
        )
        parser.add_argument("--max-retries", type=int, default=None)

    def handle(self, *args, **options):
        try:
            target = stream_target(options["kind"], options.get("sid"))
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        max_updates = options["max_updates"]
        applied = 0
        client = None

        def on_update(state: StreamState):
            nonlocal applied
            if state.error:
                self.stderr.write(self.style.WARNING(state.error))
                return
            applied += 1
            self.stdout.write(
                json.dumps({"event": target.event, "count": len(state.items)})
            )
            if max_updates is not None and applied >= max_updates:
                client.stop()

        client = SnapshotStreamClient(
            options["base_url"],
            target,
            token=options["token"],
            on_update=on_update,
            max_retries=options["max_retries"],
        )
        try:
            state = asyncio.run(client.run())
        except KeyboardInterrupt:
            client.stop()
            return

        if state.error and not applied:
            raise CommandError(state.error)
        self.stdout.write(self.style.SUCCESS(f"Applied {applied} snapshot(s)"))
