"""Category management: create, update and delete."""

from protean.exceptions import ValidationError
from sqlalchemy.orm import Session

from catalogue.category.category import Category
from catalogue.category.repository import CategoryRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def _ensure_slug_free(repo: CategoryRepository, slug: str, category_id: int | None = None) -> None:
    existing = repo.get_by_slug(slug)
    if existing is not None and existing.id != category_id:
        raise ValidationError({"slug": [f"Slug '{slug}' is already in use"]})


def _ensure_parent(repo: CategoryRepository, parent_id: int | None, category_id: int | None = None) -> None:
    """The parent must exist and must not be the category itself or one of its descendants."""
    if parent_id is None:
        return

    parent = repo.find(parent_id)
    if parent is None:
        raise ValidationError({"parent_id": ["Parent category not found"]})

    if category_id is None:
        return

    node, seen = parent, set()
    while node is not None and node.id not in seen:
        if node.id == category_id:
            raise ValidationError({"parent_id": ["A category cannot be its own ancestor"]})
        seen.add(node.id)
        node = node.parent


def create_category(
    session: Session, name, name_en=None, name_zh=None, slug=None, icon=None, parent_id=None
) -> Category:
    repo = CategoryRepository(session)
    _ensure_parent(repo, parent_id)

    category = Category.create(
        name=name,
        name_en=name_en,
        name_zh=name_zh,
        slug=slug,
        icon=icon,
        parent_id=parent_id,
    )
    _ensure_slug_free(repo, category.slug)
    repo.add(category)

    logger.info("category_created", category_id=category.id, slug=category.slug)
    return category


def update_category(session: Session, category_id: int, **fields) -> Category:
    repo = CategoryRepository(session)
    category = repo.get(category_id)

    if "parent_id" in fields:
        _ensure_parent(repo, fields["parent_id"], category.id)

    _ensure_slug_free(repo, category.slug_after(**fields), category.id)
    category.update(**fields)
    session.flush()

    logger.info("category_updated", category_id=category.id)
    return category


def delete_category(session: Session, category_id: int) -> None:
    repo = CategoryRepository(session)
    category = repo.get(category_id)

    if repo.product_count(category.id):
        raise ValidationError(
            {
                "category": [
                    "Cannot delete category with associated products. "
                    "Remove products first or reassign them to another category."
                ]
            }
        )
    if repo.has_children(category.id):
        raise ValidationError({"category": ["Cannot delete category with subcategories"]})

    repo.delete(category)
    logger.info("category_deleted", category_id=category_id)
