# Display mappings for the closed enums. Every function has a fallback.

PRIORITY_COLORS = {
    "High": "red",
    "Medium": "yellow",
    "Low": "green",
}

STATUS_LABELS = {
    "pending": "Pending",
    "in-progress": "In Progress",
    "completed": "Completed",
}

STATUS_COLORS = {
    "completed": "green",
    "in-progress": "blue",
    "pending": "gray",
}

MESSAGE_TYPE_COLORS = {
    "announcement": "blue",
    "question": "yellow",
    "general": "gray",
}

ROLE_COLORS = {
    "admin": "red",
    "editor": "blue",
    "viewer": "green",
}

DEFAULT_COLOR = "gray"
DEFAULT_STATUS_LABEL = "Unknown"


def priority_color(priority) -> str:
    return PRIORITY_COLORS.get(priority, DEFAULT_COLOR)


def status_label(status) -> str:
    return STATUS_LABELS.get(status, DEFAULT_STATUS_LABEL)


def status_color(status) -> str:
    return STATUS_COLORS.get(status, DEFAULT_COLOR)


def message_type_color(message_type) -> str:
    return MESSAGE_TYPE_COLORS.get(message_type, DEFAULT_COLOR)


def role_color(role) -> str:
    return ROLE_COLORS.get(role, DEFAULT_COLOR)
