from __future__ import annotations

from typing import Mapping, Optional, Sequence

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateSyntaxError

from ..common.datetime_utils import format_check_in
from ..core.constants import DEFAULT_MAIL_ROOM_NAME
from ..core.exceptions import ValidationError
from ..packages.model import Package
from ..persons.model import Person

DEFAULT_TEMPLATES: dict[str, str] = {
    "notification_subject": "[Package Notification] New Package for {{ person.full_name }}",
    "notification_body": (
        "{% if package.comment %}Comment: {{ package.comment }}\n{% endif %}"
        "Checked in on {{ package.check_in_time | checkin }}\n"
        "\n"
        "{{ mail_room }}\n"
    ),
    "reminder_subject": (
        "[Package Reminder] You have {{ packages | length }} "
        "package{{ '' if packages | length == 1 else 's' }} in the mail room"
    ),
    "reminder_body": (
        "Hello {{ person.first_name }},\n"
        "\n"
        "Your packages include:\n"
        "{% for package in packages %}"
        "    Package {{ loop.index }}:\n"
        "        Checked in on {{ package.check_in_time | checkin }}\n"
        "{% if package.comment %}        Comment: {{ package.comment }}\n{% endif %}"
        "{% endfor %}"
        "\n"
        "Please retrieve your packages as soon as possible.\n"
        "\n"
        "{{ mail_room }}\n"
    ),
}


class EmailTemplates:
    """Renders notification and reminder emails from editable Jinja2 sources."""

    def __init__(self, mail_room_name: str = DEFAULT_MAIL_ROOM_NAME, overrides: Optional[Mapping[str, str]] = None):
        self._mail_room = mail_room_name
        self._sources = dict(DEFAULT_TEMPLATES)
        self._env = Environment(loader=DictLoader(self._sources), undefined=StrictUndefined, autoescape=False)
        self._env.filters["checkin"] = format_check_in
        self.update_many(overrides or {})

    def sources(self) -> dict[str, str]:
        return dict(self._sources)

    def _check(self, name: str, source: str) -> None:
        if name not in DEFAULT_TEMPLATES:
            raise ValidationError(f"Unknown email template {name!r}")
        if not isinstance(source, str):
            raise ValidationError(f"Template {name!r} must be text")
        try:
            self._env.parse(source)
        except TemplateSyntaxError as e:
            raise ValidationError(f"Template {name!r} is invalid: {e.message}") from e

    def update(self, name: str, source: str) -> None:
        self._check(name, source)
        self._sources[name] = source
        # DictLoader reads the live dict; drop compiled copies of the old source.
        if self._env.cache is not None:
            self._env.cache.clear()

    def update_many(self, sources: Mapping[str, str]) -> None:
        """Replace several templates; nothing changes if any of them is invalid."""
        for name, source in sources.items():
            self._check(name, source)
        for name, source in sources.items():
            self.update(name, source)

    def _render(self, name: str, **context) -> str:
        return self._env.get_template(name).render(mail_room=self._mail_room, **context)

    def render_notification(self, person: Person, package: Package) -> tuple[str, str]:
        subject = self._render("notification_subject", person=person, package=package)
        body = self._render("notification_body", person=person, package=package)
        return " ".join(subject.split()), body

    def render_reminder(self, person: Person, packages: Sequence[Package]) -> tuple[str, str]:
        subject = self._render("reminder_subject", person=person, packages=list(packages))
        body = self._render("reminder_body", person=person, packages=list(packages))
        return " ".join(subject.split()), body
