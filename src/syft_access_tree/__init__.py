from syft_access_tree.config import AccessTreeConfig
from syft_access_tree.engine.access import (
    FolderAccess,
    PermissionAccess,
    aggregate_access,
    resolve_access,
)
from syft_access_tree.engine.disclosure import (
    LevelCounts,
    LevelDisclosureStore,
    LevelState,
)
from syft_access_tree.engine.evaluator import (
    PermissionContext,
    PermissionEvaluator,
    PolicyEvaluator,
)
from syft_access_tree.engine.graph import (
    FolderNode,
    GraphEdge,
    GraphModel,
    RoleInfo,
    RoleNode,
    ShowMoreNode,
    build_graph,
)
from syft_access_tree.engine.grouping import ROOT_LEVEL, group_by_parent
from syft_access_tree.engine.layout import LayeredLayout, LayoutAdapter
from syft_access_tree.engine.relevance import filter_relevant, is_relevant
from syft_access_tree.engine.service import (
    AccessTreeInputs,
    AccessTreeService,
    rebuild_access_tree,
)
from syft_access_tree.engine.subjects import SUBJECT_ACTIONS, PermissionSubject
from syft_access_tree.spec.folder import EnvironmentFolders, Folder, FolderSnapshot
from syft_access_tree.spec.policy import PermissionPolicy, PermissionRule

__all__ = [
    "AccessTreeConfig",
    "AccessTreeInputs",
    "AccessTreeService",
    "EnvironmentFolders",
    "Folder",
    "FolderAccess",
    "FolderNode",
    "FolderSnapshot",
    "GraphEdge",
    "GraphModel",
    "LayeredLayout",
    "LayoutAdapter",
    "LevelCounts",
    "LevelDisclosureStore",
    "LevelState",
    "PermissionAccess",
    "PermissionContext",
    "PermissionEvaluator",
    "PermissionPolicy",
    "PermissionRule",
    "PermissionSubject",
    "PolicyEvaluator",
    "ROOT_LEVEL",
    "RoleInfo",
    "RoleNode",
    "SUBJECT_ACTIONS",
    "ShowMoreNode",
    "aggregate_access",
    "build_graph",
    "filter_relevant",
    "group_by_parent",
    "is_relevant",
    "rebuild_access_tree",
    "resolve_access",
]
