"""Tag listing for a user's memos."""

from __future__ import annotations

import logging

from memo_service.infra.auth import Requester
from memo_service.memos.domain import names, tags
from memo_service.memos.domain import repo as repo_module
from memo_service.memos.domain.exceptions import InternalError
from memo_service.memos.schemas import dto
from memo_service.obs import metrics as obs_metrics

_LOG = logging.getLogger(__name__)


class TagsService:
	def __init__(
		self,
		repository: repo_module.MemosRepository | None = None,
		*,
		normalize: tags.TagNormalizer = tags.strip_pictographs,
	) -> None:
		self.repo = repository or repo_module.MemosRepository()
		self.normalize = normalize

	async def list_user_tags(self, requester: Requester, parent: str) -> dto.ListTagsResponse:
		"""List the tags on ``parent``'s memos that ``requester`` is allowed to see."""
		owner_id = names.extract_user_id(parent)
		try:
			memos = await self.repo.list_memos(creator_id=owner_id)
		except Exception as exc:
			_LOG.error("tags.list_memos_failed", exc_info=True, extra={"owner_id": owner_id})
			raise InternalError("failed to list memos") from exc
		result = tags.aggregate_tags(memos, requester, normalize=self.normalize)
		obs_metrics.observe_tags_listed(len(result))
		return dto.ListTagsResponse(tags=result)
