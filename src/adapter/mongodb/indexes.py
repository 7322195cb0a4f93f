"""MongoDB index management for the users and cases collections."""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Server error codes for an index that exists under another name or options
_CONFLICT_CODES = {85, 86}  # IndexOptionsConflict, IndexKeySpecsConflict


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a stale one that clashes with it.

    A clash is an index with the same name but other keys/options, or the
    same keys under another name (e.g. an email index created before it
    was made unique).
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in _CONFLICT_CODES:
            raise

    stale = _find_clashing_index(collection, keys, name)
    if stale is None:
        logger.error(f"Failed to resolve index conflict for {name}")
        return False

    logger.warning(f"Dropping conflicting index: {stale}")
    collection.drop_index(stale)
    collection.create_index(keys, name=name, **kwargs)
    logger.info(f"Recreated index: {name}")
    return True


def _find_clashing_index(collection: Collection, keys: list, name: str) -> str | None:
    wanted = dict(keys)
    for idx_name, info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        if idx_name == name or dict(info.get('key', [])) == wanted:
            return idx_name
    return None


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.case_repository import MongoCaseRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoCaseRepository(db).ensure_indexes(),
    ]
    return all(results)
