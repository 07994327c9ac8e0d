import pytest

from syft_access_tree import (
    EnvironmentFolders,
    Folder,
    FolderSnapshot,
    PermissionAccess,
    PermissionPolicy,
    PermissionRule,
    PermissionSubject,
    PolicyEvaluator,
)

TEST_ENVIRONMENT = "dev"
TEST_ENVIRONMENT_NAME = "Development"


class StubEvaluator:
    """Grants each action at a fixed access level, regardless of the folder."""

    def __init__(self, grants: dict[str, PermissionAccess]):
        self.grants = grants
        self.calls = []

    def can(self, action, subject, context=None) -> bool:
        self.calls.append((action, subject, context))
        access = self.grants.get(action, PermissionAccess.NONE)
        if context is None:
            return access != PermissionAccess.NONE
        return access == PermissionAccess.FULL

    def rules_for(self, action, subject):
        return []


def make_folder(id: str, path: str, parent_id: str | None = None) -> Folder:
    name = path.rstrip("/").rsplit("/", 1)[-1] or "root"
    return Folder(id=id, path=path, parent_id=parent_id, name=name)


def wide_folders(count: int) -> list[Folder]:
    """A root folder, /x under it and `count` children under /x."""
    folders = [make_folder("a", "/"), make_folder("b", "/x", "a")]
    folders += [make_folder(f"c{i}", f"/x/c{i}", "b") for i in range(count)]
    return folders


@pytest.fixture
def scenario_folders() -> list[Folder]:
    return [
        make_folder("a", "/"),
        make_folder("b", "/x", "a"),
        make_folder("c", "/x/y", "b"),
    ]


@pytest.fixture
def snapshot(scenario_folders) -> FolderSnapshot:
    return FolderSnapshot(
        environments={
            TEST_ENVIRONMENT: EnvironmentFolders(
                name=TEST_ENVIRONMENT_NAME, folders=scenario_folders
            ),
            "prod": EnvironmentFolders(
                name="Production", folders=[make_folder("p", "/")]
            ),
        }
    )


@pytest.fixture
def policy_evaluator() -> PolicyEvaluator:
    return PolicyEvaluator(
        PermissionPolicy(
            rules=[
                PermissionRule(
                    subject=PermissionSubject.SECRETS,
                    actions=["describeSecret", "readValue"],
                    conditions={"environment": "dev", "secret_path": "/x/**"},
                ),
                PermissionRule(subject=PermissionSubject.SECRETS, actions=["edit"]),
                PermissionRule(
                    subject=PermissionSubject.SECRETS,
                    actions=["edit"],
                    conditions={"secret_path": "/x/y/**"},
                    inverted=True,
                ),
            ]
        )
    )
