from dataclasses import dataclass, field
from enum import Enum

from syft_access_tree.engine.evaluator import (
    ANY_VALUE,
    PermissionContext,
    PermissionEvaluator,
)
from syft_access_tree.engine.subjects import PermissionSubject, actions_for
from syft_access_tree.spec.folder import Folder
from syft_access_tree.spec.policy import PermissionRule


class PermissionAccess(str, Enum):
    NONE = "None"
    PARTIAL = "Partial"
    FULL = "Full"


@dataclass(frozen=True)
class FolderAccess:
    actions: dict[str, PermissionAccess]
    aggregated: PermissionAccess
    rules: dict[str, list[PermissionRule]] = field(default_factory=dict)


def aggregate_access(actions: dict[str, PermissionAccess]) -> PermissionAccess:
    """Best-case access across actions: Full > Partial > None."""
    values = set(actions.values())
    if PermissionAccess.FULL in values:
        return PermissionAccess.FULL
    if PermissionAccess.PARTIAL in values:
        return PermissionAccess.PARTIAL
    return PermissionAccess.NONE


def classify_action(
    action: str,
    subject: PermissionSubject,
    evaluator: PermissionEvaluator,
    context: PermissionContext,
) -> PermissionAccess:
    if evaluator.can(action, subject, context):
        return PermissionAccess.FULL
    # allowed somewhere, but not under this folder's conditions
    if evaluator.can(action, subject):
        return PermissionAccess.PARTIAL
    return PermissionAccess.NONE


def resolve_access(
    subject: PermissionSubject,
    evaluator: PermissionEvaluator,
    folder: Folder,
    environment: str,
    secret_name: str | None = None,
) -> FolderAccess:
    subject = PermissionSubject(subject)
    context = PermissionContext(
        environment=environment,
        secret_path=folder.path,
        secret_name=secret_name or ANY_VALUE,
    )
    actions = {
        action: classify_action(action, subject, evaluator, context)
        for action in actions_for(subject)
    }
    rules = {action: evaluator.rules_for(action, subject) for action in actions}
    return FolderAccess(
        actions=actions, aggregated=aggregate_access(actions), rules=rules
    )
