"""Redirect Manager - safe redirect creation with loop and chain detection."""
import logging
import math
import uuid
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select, func, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.core.config import settings
from seopanel.db.enums import REDIRECT_STATUS_CODES
from seopanel.db.models import Redirect
from seopanel.error_codes import ErrorCodeDictionary
from seopanel.exceptions import BulkLimitExceeded, ValidationFailed
from seopanel.types import RedirectCheckResult, RedirectCreationResult

logger = logging.getLogger(__name__)


class RedirectManager:
    """
    Manages the redirect graph of a site.

    Ensures:
    - No redirect closes a cycle (including self-redirects)
    - No chain through a new redirect reaches the maximum depth
    - At most one outgoing redirect per source path
    - Nothing is persisted before every check has passed
    """

    def __init__(self, max_chain_depth: Optional[int] = None, delete_limit: Optional[int] = None):
        self.max_chain_depth = max_chain_depth or settings.max_redirect_chain_depth
        self.delete_limit = delete_limit or settings.redirect_delete_limit

    async def _load_edges(self, db: AsyncSession, site_id: str) -> Dict[str, str]:
        result = await db.execute(
            select(Redirect.from_path, Redirect.to_path).where(Redirect.site_id == site_id)
        )
        return {row.from_path: row.to_path for row in result.all()}

    def _failure(self, error_code, message: str, chain_length: int = 0) -> RedirectCheckResult:
        return {
            "valid": False,
            "error": message,
            "error_code": error_code.code,
            "chain_length": chain_length,
        }

    def _incoming_depth(self, edges: Dict[str, str], node: str) -> int:
        """Longest chain of existing redirects ending at `node`, bounded by the max depth"""
        sources = defaultdict(list)
        for source, target in edges.items():
            sources[target].append(source)

        depth = 0
        frontier = [node]
        visited = {node}
        while frontier and depth < self.max_chain_depth:
            next_frontier = []
            for current in frontier:
                for source in sources.get(current, []):
                    if source not in visited:
                        visited.add(source)
                        next_frontier.append(source)
            if not next_frontier:
                break
            depth += 1
            frontier = next_frontier
        return depth

    async def check_redirect_chain(
        self,
        db: AsyncSession,
        site_id: str,
        from_path: str,
        to_path: str,
    ) -> RedirectCheckResult:
        """
        Check whether adding `from_path -> to_path` is safe.

        The forward walk from `to_path` stops after max depth hops or on the
        first revisited node, so it terminates even when stored data already
        contains a cycle.

        Args:
            db: Database session
            site_id: Site identifier
            from_path: Source path or slug
            to_path: Destination path or slug

        Returns:
            {
                "valid": bool,
                "error": Optional[str],
                "error_code": Optional[str],
                "chain_length": int
            }
        """
        if from_path == to_path:
            return self._failure(
                ErrorCodeDictionary.REDIRECT_LOOP,
                f"Redirect from '{from_path}' to itself would create a loop",
            )

        edges = await self._load_edges(db, site_id)

        # Follow the destination's outgoing chain
        outgoing = 0
        visited = {to_path}
        current = to_path
        while current in edges and outgoing < self.max_chain_depth:
            target = edges[current]
            outgoing += 1
            if target == from_path or target in visited:
                return self._failure(
                    ErrorCodeDictionary.REDIRECT_LOOP,
                    f"Redirect from '{from_path}' to '{to_path}' would create a loop",
                    chain_length=outgoing + 1,
                )
            visited.add(target)
            current = target

        chain_length = self._incoming_depth(edges, from_path) + 1 + outgoing
        if chain_length >= self.max_chain_depth:
            return self._failure(
                ErrorCodeDictionary.REDIRECT_CHAIN_TOO_LONG,
                f"Redirect chain would reach {chain_length} hops (maximum {self.max_chain_depth - 1})",
                chain_length=chain_length,
            )

        if from_path in edges:
            return self._failure(
                ErrorCodeDictionary.REDIRECT_EXISTS,
                f"A redirect from '{from_path}' already exists",
                chain_length=chain_length,
            )

        return {"valid": True, "error": None, "error_code": None, "chain_length": chain_length}

    async def create_redirect_safely(
        self,
        db: AsyncSession,
        site_id: str,
        from_path: str,
        to_path: str,
        status_code: int = 301,
        actor_id: Optional[str] = None,
    ) -> RedirectCreationResult:
        """
        Create a redirect after the loop, chain and uniqueness checks.

        Safety failures are returned, never raised, so callers can treat them
        as non-fatal.

        Raises:
            ValidationFailed: If the status code is not a redirect status
        """
        if status_code not in REDIRECT_STATUS_CODES:
            raise ValidationFailed(
                f"Invalid redirect status code: {status_code}",
                context={"allowed": list(REDIRECT_STATUS_CODES)},
            )

        check = await self.check_redirect_chain(db, site_id, from_path, to_path)
        if not check["valid"]:
            logger.warning(
                f"Rejected redirect {from_path} -> {to_path} for site {site_id}: {check['error_code']}"
            )
            return {
                "success": False,
                "redirect": None,
                "error": check["error"],
                "error_code": check["error_code"],
                "chain_length": check["chain_length"],
            }

        redirect = Redirect(
            site_id=site_id,
            from_path=from_path,
            to_path=to_path,
            status_code=status_code,
            created_by=actor_id,
        )
        db.add(redirect)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent writer for the same source
            await db.rollback()
            logger.warning(f"Redirect from {from_path} already exists for site {site_id}")
            return {
                "success": False,
                "redirect": None,
                "error": f"A redirect from '{from_path}' already exists",
                "error_code": ErrorCodeDictionary.REDIRECT_EXISTS.code,
                "chain_length": check["chain_length"],
            }
        await db.refresh(redirect)

        logger.info(f"Created {status_code} redirect {from_path} -> {to_path} for site {site_id}")
        return {
            "success": True,
            "redirect": redirect.to_dict(),
            "error": None,
            "error_code": None,
            "chain_length": check["chain_length"],
        }

    async def list_redirects(
        self,
        db: AsyncSession,
        site_id: str,
        page: int = 1,
        limit: int = 20,
        status_code: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List redirects newest first with pagination and status-code statistics"""
        conditions = [Redirect.site_id == site_id]
        if status_code is not None:
            conditions.append(Redirect.status_code == status_code)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(func.lower(Redirect.from_path).like(pattern), func.lower(Redirect.to_path).like(pattern))
            )

        total = await db.scalar(select(func.count(Redirect.id)).where(*conditions))
        result = await db.execute(
            select(Redirect)
            .where(*conditions)
            .order_by(Redirect.created_at.desc(), Redirect.from_path)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        redirects = [redirect.to_dict() for redirect in result.scalars().all()]

        stats_result = await db.execute(
            select(Redirect.status_code, func.count(Redirect.id))
            .where(Redirect.site_id == site_id)
            .group_by(Redirect.status_code)
        )
        by_status_code = {str(code): count for code, count in stats_result.all()}

        total_pages = math.ceil(total / limit) if total else 0
        return {
            "redirects": redirects,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": total_pages,
                "has_next": page < total_pages,
                "has_prev": page > 1,
            },
            "statistics": {
                "total": sum(by_status_code.values()),
                "by_status_code": by_status_code,
            },
        }

    async def delete_redirects(
        self,
        db: AsyncSession,
        site_id: str,
        ids: Sequence[str],
    ) -> List[Dict[str, Any]]:
        """
        Delete redirects by id.

        Raises:
            ValidationFailed: If no ids are given or an id is malformed
            BulkLimitExceeded: If more than the delete limit are requested

        Returns:
            The deleted redirects
        """
        if not ids:
            raise ValidationFailed("No redirect ids provided")
        if len(ids) > self.delete_limit:
            raise BulkLimitExceeded(
                f"Cannot delete more than {self.delete_limit} redirects at once",
                context={"limit": self.delete_limit, "requested": len(ids)},
            )

        try:
            redirect_ids = [uuid.UUID(str(value)) for value in ids]
        except ValueError:
            raise ValidationFailed("Invalid redirect id", context={"ids": list(ids)})

        result = await db.execute(
            select(Redirect).where(Redirect.site_id == site_id, Redirect.id.in_(redirect_ids))
        )
        deleted = [redirect.to_dict() for redirect in result.scalars().all()]

        await db.execute(
            delete(Redirect).where(Redirect.site_id == site_id, Redirect.id.in_(redirect_ids))
        )
        await db.commit()

        logger.info(f"Deleted {len(deleted)} redirects for site {site_id}")
        return deleted
