import logging
from contextlib import contextmanager
from typing import Optional

from beanie import PydanticObjectId
from beanie.exceptions import CollectionWasNotInitialized
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.errors import ConfigurationError, ConflictError, PersistenceError
from app.schemas.UserSchemas import User, UserDoc
from app.tools.serializers import serialize_document

logger = logging.getLogger(__name__)


@contextmanager
def persistence_errors():
    """Re-raise driver failures as PersistenceError, and use of an
    uninitialized store as ConfigurationError."""
    try:
        yield
    except CollectionWasNotInitialized as e:
        # init_beanie never ran (no MongoDB at startup)
        logger.error(f"MongoDB store used before initialization: {e}")
        raise ConfigurationError("MongoDB not configured") from e
    except PyMongoError as e:
        logger.exception("MongoDB operation failed")
        raise PersistenceError(detail=str(e))


def _to_user(doc: UserDoc) -> User:
    return User.model_validate(serialize_document(doc, exclude=["revision_id"]))


class CRUDUser:
    """Credential store backed by the `users` collection.

    Emails are matched verbatim; callers lowercase them first.
    """

    async def exists(self, email: str) -> bool:
        with persistence_errors():
            return await UserDoc.find({"email": email}).count() > 0

    async def create(self, user: User) -> User:
        with persistence_errors():
            doc = UserDoc(**user.model_dump(exclude={"id"}))
            try:
                await doc.insert()
            except DuplicateKeyError:
                # lost a race against the unique email index
                raise ConflictError("User already exists")
        return _to_user(doc)

    async def find_by_email(self, email: str) -> Optional[User]:
        with persistence_errors():
            doc = await UserDoc.find_one({"email": email})
        return _to_user(doc) if doc else None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        if not ObjectId.is_valid(user_id):
            return None
        with persistence_errors():
            doc = await UserDoc.get(PydanticObjectId(user_id))
        return _to_user(doc) if doc else None
