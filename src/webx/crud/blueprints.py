"""Blueprint persistence: save, lookup, listing, search and download counts"""

import logging
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from webx.core.builders import SAMPLE_BLUEPRINTS
from webx.core.codec import BlueprintLike, ensure_blueprint, decode, encode
from webx.core.models import Blueprint
from webx.core.utils.hashing import content_hash
from webx.crud.models import StoredBlueprint


logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "other"
DEFAULT_AUTHOR = "Anonymous"


def save_blueprint(
    session: Session,
    doc: BlueprintLike,
    compress: bool = False,
    featured: bool | None = None,
    downloads: int | None = None,
    ) -> StoredBlueprint:
    """Encode, hash and store a blueprint. Raises SchemaViolation on an invalid document.

    featured/downloads default to the values in meta, else False/0.
    Flushes but does not commit; caller controls the transaction.
    """
    blueprint = ensure_blueprint(doc)
    meta = blueprint.meta
    row = StoredBlueprint(
        title=blueprint.title,
        layout=blueprint.layout.value,
        payload=encode(blueprint, compress=compress),
        raw_data=blueprint.to_wire(),
        category=meta.category or DEFAULT_CATEGORY,
        author=meta.author or DEFAULT_AUTHOR,
        featured=bool(meta.featured) if featured is None else featured,
        downloads=int(meta.downloads or 0) if downloads is None else downloads,
        content_hash=str(content_hash(blueprint)),
    )
    session.add(row)
    session.flush()
    logger.info("Stored blueprint %s (%s)", row.id, row.content_hash)
    return row


def load_blueprint(row: StoredBlueprint) -> Blueprint:
    """Decode the stored payload back into a Blueprint."""
    return decode(row.payload)


def get_by_id(session: Session, blueprint_id: UUID) -> StoredBlueprint | None:
    return session.get(StoredBlueprint, blueprint_id)


def get_by_hash(session: Session, hash_value: str) -> list[StoredBlueprint]:
    """Return rows sharing a content hash, i.e. the same rendered content."""
    return list(session.exec(select(StoredBlueprint).where(StoredBlueprint.content_hash == hash_value)).all())


def get_all(session: Session) -> list[StoredBlueprint]:
    """Return all stored blueprints, newest first."""
    return list(session.exec(select(StoredBlueprint).order_by(col(StoredBlueprint.created_at).desc())).all())


def get_by_category(session: Session, category: str) -> list[StoredBlueprint]:
    """Return blueprints in a category, newest first."""
    return list(session.exec(
        select(StoredBlueprint)
        .where(StoredBlueprint.category == category)
        .order_by(col(StoredBlueprint.created_at).desc())
    ).all())


def get_featured(session: Session) -> list[StoredBlueprint]:
    """Return featured blueprints, most downloaded first."""
    return list(session.exec(
        select(StoredBlueprint)
        .where(StoredBlueprint.featured == True)  # noqa: E712
        .order_by(col(StoredBlueprint.downloads).desc())
    ).all())


def search(session: Session, query: str) -> list[StoredBlueprint]:
    """Case-insensitive substring search over title, author and category, newest first."""
    pattern = f"%{query.lower()}%"
    return list(session.exec(
        select(StoredBlueprint)
        .where(or_(
            func.lower(StoredBlueprint.title).like(pattern),
            func.lower(StoredBlueprint.author).like(pattern),
            func.lower(StoredBlueprint.category).like(pattern),
        ))
        .order_by(col(StoredBlueprint.created_at).desc())
    ).all())


def increment_downloads(session: Session, blueprint_id: UUID) -> bool:
    """Add one to a blueprint's download count. Returns False if the id is unknown."""
    row = session.get(StoredBlueprint, blueprint_id)
    if row is None:
        return False
    row.downloads = (row.downloads or 0) + 1
    session.add(row)
    session.flush()
    return True


def seed_samples(session: Session) -> int:
    """Insert SAMPLE_BLUEPRINTS into an empty store. Returns the number inserted."""
    existing = session.exec(select(func.count()).select_from(StoredBlueprint)).one()
    if existing:
        return 0
    for blueprint in SAMPLE_BLUEPRINTS.values():
        save_blueprint(session, blueprint)
    logger.info("Seeded %d sample blueprints", len(SAMPLE_BLUEPRINTS))
    return len(SAMPLE_BLUEPRINTS)
