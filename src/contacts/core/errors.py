"""Errors raised by the contact directory and mapped to responses at the HTTP boundary."""


class ContactDirectoryError(Exception):
    """Base class for directory errors."""


class NotFound(ContactDirectoryError):
    """No record with the requested id."""

    def __init__(self, resource: str, resource_id: str | None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id!r} not found")


class ValidationFailed(ContactDirectoryError):
    """Submitted attributes were rejected; nothing was persisted."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Validation failed: {fields}")

    def messages(self) -> list[str]:
        """Flattened human-readable messages, e.g. ``"Firstname can't be blank"``."""
        return [
            f"{_humanize(field)} {message}"
            for field, field_messages in self.errors.items()
            for message in field_messages
        ]


class Unauthorized(ContactDirectoryError):
    """A guest attempted an action that requires a logged-in user."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Login required for {action}")


def _humanize(field: str) -> str:
    # "phones[1].number" -> "Phone 2 number"
    if field.startswith("phones[") and "]." in field:
        index, _, attribute = field[len("phones["):].partition("].")
        return f"Phone {int(index) + 1} {attribute.replace('_', ' ')}"
    return field.replace("_", " ").capitalize()
