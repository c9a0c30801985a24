"""Domain errors of the catalog engagement core.

Every error is a ``RuntimeError`` whose message starts with a short code
(``review_not_found``, ``forbidden``...). The HTTP layer maps those codes to
status codes, see ``cinelog_api.api.http_utils.handle_runtime_errors``.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(RuntimeError):
    """Base class; ``code`` is the stable, machine readable identifier."""

    code = 'catalog_error'

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        message = self.code if not detail else f'{self.code}: {detail}'
        super().__init__(message)


class InvalidScore(CatalogError):
    code = 'invalid_score'


class ContentNotFound(CatalogError):
    code = 'content_not_found'


class ReviewNotFound(CatalogError):
    code = 'review_not_found'


class ListNotFound(CatalogError):
    code = 'list_not_found'


class Forbidden(CatalogError):
    code = 'forbidden'


class SelfVoteForbidden(CatalogError):
    """Author tried to vote on their own review."""

    code = 'self_vote_forbidden'


class ConflictDuplicate(CatalogError):
    """Uniqueness race that did not settle within the retry budget."""

    code = 'conflict_duplicate'


class StorageError(CatalogError):
    """Database failure; never a consequence of bad input."""

    code = 'storage_error'
