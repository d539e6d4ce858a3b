"""MongoDB implementation of UserRepository."""

import uuid
from datetime import date, datetime, time, timezone
from logging import getLogger
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import ConflictError, InternalError
from domain.model.user import PROFILE_FIELDS, User

logger = getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User already exists with this email"
READ_FAILED_MESSAGE = "Database error"


def _date_to_bson(value: date | None) -> datetime | None:
    # BSON has no date-only type; store midnight UTC.
    if value is None:
        return None
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _date_from_bson(value: datetime | None) -> date | None:
    if value is None:
        return None
    return value.date()


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            full_name=doc['full_name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc.get('updated_at', doc['created_at']),
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
            age=doc.get('age'),
            date_of_birth=_date_from_bson(doc.get('date_of_birth')),
            gender=doc.get('gender'),
            hobbies=list(doc.get('hobbies') or []),
            mother_name=doc.get('mother_name'),
            father_name=doc.get('father_name'),
            user_mobile=doc.get('user_mobile'),
            parent_mobile=doc.get('parent_mobile'),
            description=doc.get('description'),
        )

    def create(self, email: str, password_hash: str, full_name: str) -> User | None:
        """Insert a new user. The unique email index makes this atomic."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'full_name': full_name,
            'hobbies': [],
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found.

        A failed read raises InternalError so callers never mistake an
        outage for an unknown account.
        """
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise InternalError(READ_FAILED_MESSAGE) from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise InternalError(READ_FAILED_MESSAGE) from e
        return self._to_domain(doc) if doc else None

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
            if result.modified_count > 0:
                logger.debug("Updated last_login", extra={"userId": user_id})
                return True
            return False
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """$set the given profile fields and return the document after the write."""
        update = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
        if 'date_of_birth' in update:
            update['date_of_birth'] = _date_to_bson(update['date_of_birth'])
        update['updated_at'] = datetime.now(timezone.utc)

        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update profile", extra={"userId": user_id, "error": str(e)})
            return None

        if not doc:
            return None
        logger.info("Profile updated", extra={"userId": user_id, "fields": sorted(fields)})
        return self._to_domain(doc)
