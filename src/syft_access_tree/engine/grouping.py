from syft_access_tree.spec.folder import Folder


class _RootLevel:
    """Key of the level holding folders without a parent in the current set."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ROOT_LEVEL"

    def __reduce__(self):
        return (_RootLevel, ())


ROOT_LEVEL = _RootLevel()

ParentKey = str | _RootLevel


def group_by_parent(folders: list[Folder]) -> dict[ParentKey, list[Folder]]:
    """Group folders by parent id, keeping first-seen key order and input order
    within each group. Folders whose parent is absent go under ROOT_LEVEL."""
    folder_ids = {folder.id for folder in folders}
    grouped: dict[ParentKey, list[Folder]] = {}
    for folder in folders:
        if folder.parent_id and folder.parent_id in folder_ids:
            key: ParentKey = folder.parent_id
        else:
            key = ROOT_LEVEL
        grouped.setdefault(key, []).append(folder)
    return grouped
