from enum import Enum


class PermissionSubject(str, Enum):
    SECRETS = "secrets"
    SECRET_FOLDERS = "secret-folders"
    DYNAMIC_SECRETS = "dynamic-secrets"
    SECRET_IMPORTS = "secret-imports"


# Fixed per-subject action enumeration, in display order
SUBJECT_ACTIONS: dict[PermissionSubject, tuple[str, ...]] = {
    PermissionSubject.SECRETS: (
        "describeSecret",
        "readValue",
        "create",
        "edit",
        "delete",
    ),
    PermissionSubject.SECRET_FOLDERS: ("create", "edit", "delete"),
    PermissionSubject.DYNAMIC_SECRETS: (
        "read-root-credential",
        "create-root-credential",
        "edit-root-credential",
        "delete-root-credential",
        "lease",
    ),
    PermissionSubject.SECRET_IMPORTS: ("read", "create", "edit", "delete"),
}


def actions_for(subject: PermissionSubject | str) -> tuple[str, ...]:
    """Actions defined for a subject. Raises ValueError for unknown subjects."""
    return SUBJECT_ACTIONS[PermissionSubject(subject)]
