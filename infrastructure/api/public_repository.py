"""
API implementation of the Public (reference data) repository.
"""

from typing import List

from core.domain.models import CityData
from core.domain.result import Result, guard
from core.interfaces.repositories import IPublicRepository
from infrastructure.api.base import ApiRepository


class ApiPublicRepository(ApiRepository, IPublicRepository):

    async def get_cities(self) -> Result[List[CityData]]:
        return await guard(lambda: self._get("publicc/GetCities", List[CityData]))
