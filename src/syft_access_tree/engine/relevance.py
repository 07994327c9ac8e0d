import logging

from syft_access_tree.spec.folder import PATH_SEPARATOR, Folder

logger = logging.getLogger(__name__)

ROOT_PATH = PATH_SEPARATOR


def normalize_focus_path(focus_path: str | None) -> str:
    """An empty focus path means the whole tree."""
    return focus_path or ROOT_PATH


def is_relevant(folder_path: str, focus_path: str) -> bool:
    """True if the folder is the focus path, one of its descendants, or one of
    its ancestors. `/foo` is not an ancestor of `/foobar`."""
    if folder_path.startswith(focus_path):
        return True

    if focus_path.startswith(folder_path):
        return (
            folder_path == ROOT_PATH
            or focus_path == folder_path
            or focus_path[len(folder_path)] == PATH_SEPARATOR
        )

    return False


def filter_relevant(folders: list[Folder], focus_path: str) -> list[Folder]:
    focus_path = normalize_focus_path(focus_path)
    relevant = []
    for folder in folders:
        if not folder.path.startswith(PATH_SEPARATOR):
            logger.debug(
                f"Skipping folder {folder.id} with malformed path {folder.path!r}"
            )
            continue
        if is_relevant(folder.path, focus_path):
            relevant.append(folder)
    return relevant
