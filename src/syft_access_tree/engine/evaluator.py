import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Protocol

from syft_access_tree.engine.matchers import create_matcher
from syft_access_tree.engine.subjects import PermissionSubject
from syft_access_tree.spec.policy import PermissionPolicy, PermissionRule

logger = logging.getLogger(__name__)

ANY_VALUE = "*"
PATH_FIELDS = {"secret_path"}


@dataclass(frozen=True)
class PermissionContext:
    """Attributes of the object a permission check is scoped to."""

    environment: str
    secret_path: str
    secret_name: str = ANY_VALUE
    secret_tags: tuple[str, ...] = (ANY_VALUE,)

    def values(self, field_name: str) -> list[str] | None:
        if field_name == "secret_tags":
            return list(self.secret_tags)
        if field_name not in {f.name for f in fields(self)}:
            return None
        return [getattr(self, field_name)]


class PermissionEvaluator(Protocol):
    def can(
        self,
        action: str,
        subject: PermissionSubject,
        context: PermissionContext | None = None,
    ) -> bool: ...

    def rules_for(
        self, action: str, subject: PermissionSubject
    ) -> list[PermissionRule]: ...


class PolicyEvaluator:
    """Evaluates a PermissionPolicy.

    Rules are checked from last to first and the first relevant rule decides;
    inverted rules deny. Without a context the check is made against the
    subject type: conditional rules count as allowing and conditional
    inverted rules are skipped.
    """

    def __init__(self, policy: PermissionPolicy):
        self.policy = policy
        for rule in policy.rules:
            unknown = rule.unknown_actions()
            if unknown:
                logger.warning(
                    f"Rule for {rule.subject.value} references unknown actions: "
                    f"{', '.join(unknown)}"
                )

    @classmethod
    def load(cls, filepath: Path) -> "PolicyEvaluator":
        return cls(PermissionPolicy.load(filepath))

    def rules_for(
        self, action: str, subject: PermissionSubject
    ) -> list[PermissionRule]:
        subject = PermissionSubject(subject)
        return [
            rule
            for rule in self.policy.rules
            if rule.subject == subject and action in rule.actions
        ]

    def can(
        self,
        action: str,
        subject: PermissionSubject,
        context: PermissionContext | None = None,
    ) -> bool:
        for rule in reversed(self.rules_for(action, subject)):
            if context is None:
                if rule.inverted and rule.is_conditional:
                    continue
                return not rule.inverted
            if _matches_conditions(rule, context):
                return not rule.inverted
        return False


def _matches_conditions(rule: PermissionRule, context: PermissionContext) -> bool:
    for field_name, pattern in rule.conditions.items():
        values = context.values(field_name)
        if values is None:
            return False
        matcher = create_matcher(pattern, is_path=field_name in PATH_FIELDS)
        if not any(matcher.match(value) for value in values):
            return False
    return True
