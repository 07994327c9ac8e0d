import logging
from dataclasses import dataclass, field, fields, replace

from syft_access_tree.config import AccessTreeConfig
from syft_access_tree.engine.access import resolve_access
from syft_access_tree.engine.disclosure import LevelCounts, LevelDisclosureStore
from syft_access_tree.engine.evaluator import PermissionEvaluator
from syft_access_tree.engine.graph import GraphModel, RoleInfo, build_graph
from syft_access_tree.engine.grouping import ParentKey, group_by_parent
from syft_access_tree.engine.layout import LayeredLayout, LayoutAdapter
from syft_access_tree.engine.relevance import filter_relevant, normalize_focus_path
from syft_access_tree.engine.subjects import PermissionSubject
from syft_access_tree.spec.folder import EnvironmentFolders, FolderSnapshot

logger = logging.getLogger(__name__)

# compared by identity, everything else by equality
_IDENTITY_INPUTS = ("snapshot", "evaluator")


@dataclass(frozen=True)
class AccessTreeInputs:
    """Everything a rebuild depends on."""

    snapshot: FolderSnapshot | None = None
    evaluator: PermissionEvaluator | None = None
    environment: str = ""
    subject: PermissionSubject = PermissionSubject.SECRETS
    focus_path: str = "/"
    secret_name: str | None = None

    def environment_folders(self) -> EnvironmentFolders | None:
        if self.snapshot is None:
            return None
        return self.snapshot.get(self.environment)

    @property
    def is_ready(self) -> bool:
        return self.evaluator is not None and self.environment_folders() is not None


def rebuild_levels(
    inputs: AccessTreeInputs, store: LevelDisclosureStore, initial_page_size: int
) -> None:
    """Filter and group the environment's folders into a fresh set of levels."""
    env = inputs.environment_folders()
    if env is None:
        store.clear()
        return
    relevant = filter_relevant(env.folders, inputs.focus_path)
    store.rebuild(group_by_parent(relevant), initial_page_size)


def rebuild_access_tree(
    inputs: AccessTreeInputs, store: LevelDisclosureStore
) -> GraphModel:
    """Build the graph for the folders currently visible in `store`.

    Returns an empty graph when the inputs are not ready.
    """
    env = inputs.environment_folders()
    if env is None or inputs.evaluator is None:
        return GraphModel()

    role = RoleInfo(
        subject=inputs.subject,
        environment=inputs.environment,
        environment_name=env.name,
    )
    visible = store.visible_folders()
    access_by_folder = {
        folder.id: resolve_access(
            inputs.subject,
            inputs.evaluator,
            folder,
            inputs.environment,
            inputs.secret_name,
        )
        for folder in visible
    }
    return build_graph(role, visible, access_by_folder, store.snapshot())


@dataclass
class AccessTreeService:
    config: AccessTreeConfig = field(default_factory=AccessTreeConfig)
    layout: LayoutAdapter | None = None
    inputs: AccessTreeInputs | None = None
    store: LevelDisclosureStore = field(default_factory=LevelDisclosureStore)
    graph: GraphModel = field(default_factory=GraphModel)

    def __post_init__(self):
        if self.layout is None:
            self.layout = LayeredLayout(
                node_width=self.config.node_width,
                node_height=self.config.node_height,
                rank_sep=self.config.rank_sep,
                node_sep=self.config.node_sep,
            )
        if self.inputs is None:
            self.inputs = AccessTreeInputs(
                environment=self.config.default_environment or "",
                subject=self.config.default_subject,
            )

    @property
    def is_ready(self) -> bool:
        return self.inputs.is_ready

    @property
    def total_folder_count(self) -> int:
        return self.store.total_folder_count

    def update(self, **changes) -> bool:
        """Apply new inputs and rebuild if any of them changed.

        Returns True if a rebuild ran.
        """
        known = {f.name for f in fields(AccessTreeInputs)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown access tree inputs: {', '.join(sorted(unknown))}")

        if "subject" in changes:
            changes["subject"] = PermissionSubject(changes["subject"])
        if "focus_path" in changes:
            changes["focus_path"] = normalize_focus_path(changes["focus_path"])

        changed = False
        for name, value in changes.items():
            current = getattr(self.inputs, name)
            if name in _IDENTITY_INPUTS:
                changed = changed or value is not current
            else:
                changed = changed or value != current

        if not changed:
            return False

        self.inputs = replace(self.inputs, **changes)
        self.rebuild()
        return True

    def rebuild(self) -> GraphModel:
        """Rebuild levels and graph from scratch, dropping disclosure state."""
        if not self.is_ready:
            logger.debug(
                f"Access tree not ready for environment {self.inputs.environment!r}"
            )
            self.store.clear()
            self.graph = GraphModel()
            return self.graph

        rebuild_levels(self.inputs, self.store, self.config.initial_page_size)
        return self._render()

    def show_more(self, parent_id: ParentKey) -> LevelCounts:
        before = self.store.counts_for(parent_id)
        self.store.show_more(parent_id, self.config.page_increment)
        after = self.store.counts_for(parent_id)
        if after != before:
            self._render()
        return after

    def levels_with_more(self) -> list[ParentKey]:
        return self.store.levels_with_more()

    def counts_for(self, parent_id: ParentKey) -> LevelCounts:
        return self.store.counts_for(parent_id)

    def _render(self) -> GraphModel:
        graph = rebuild_access_tree(self.inputs, self.store)
        self.graph = self.layout(graph) if not graph.is_empty() else graph
        logger.debug(
            f"Built access tree with {len(self.graph.nodes)} nodes "
            f"and {len(self.graph.edges)} edges"
        )
        return self.graph
