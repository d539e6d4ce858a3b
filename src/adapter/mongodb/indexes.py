"""MongoDB index management utilities."""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing any existing index that clashes with it.

    A clash is an index with our name but other keys (schema change), or our
    keys under another name (rename). MongoDB refuses both, so the old index
    is dropped first.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    clashing = _find_clashing_indexes(collection, keys, name)
    if not clashing:
        logger.error(f"Failed to resolve index conflict for {name}")
        return False

    for idx_name in clashing:
        logger.warning(f"Dropping conflicting index: {idx_name}")
        collection.drop_index(idx_name)
    collection.create_index(keys, name=name, **kwargs)
    logger.info(f"Recreated index: {name}")
    return True


def _find_clashing_indexes(collection, keys: list, name: str) -> list[str]:
    wanted = dict(keys)
    clashing = []
    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted
        if same_name != same_keys:
            clashing.append(idx_name)
    return clashing


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
