from syft_access_tree import AccessTreeService, EnvironmentFolders, FolderSnapshot
from syft_access_tree.display import build_rich_tree, render_access_tree
from syft_access_tree.engine.graph import GraphModel

from .conftest import StubEvaluator, wide_folders


def _service() -> AccessTreeService:
    service = AccessTreeService()
    service.update(
        snapshot=FolderSnapshot(
            environments={
                "dev": EnvironmentFolders(name="Development", folders=wide_folders(12))
            }
        ),
        evaluator=StubEvaluator({}),
        environment="dev",
    )
    return service


def test_render_tree_lists_folders_and_show_more():
    text = render_access_tree(_service().graph)
    assert "secrets" in text
    assert "Development" in text
    assert "/x/c9" in text
    assert "/x/c10" not in text
    assert "show 2 more" in text
    assert "None" in text


def test_render_empty_graph():
    assert build_rich_tree(GraphModel()) is None
    assert "No folders to show" in render_access_tree(GraphModel())
