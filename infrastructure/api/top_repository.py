"""
API implementation of the Top (rankings) repository.
"""

from core.domain.models import TopListResponse, Top100Response
from core.domain.result import Result, guard
from core.interfaces.repositories import ITopRepository
from infrastructure.api.base import ApiRepository


class ApiTopRepository(ApiRepository, ITopRepository):
    """Ranking lists backed by the remote API"""

    async def get_top_view(self, city: str) -> Result[TopListResponse]:
        return await guard(lambda: self._post("Top/lists", TopListResponse, form={"city": city}))

    async def get_top100_data(self, city: str, tab_index: int = 1, tid: str = "2") -> Result[Top100Response]:
        params = {"city": city, "tabIndex": str(tab_index), "tid": tid}
        return await guard(lambda: self._get("Top/getTop100Data", Top100Response, params))
