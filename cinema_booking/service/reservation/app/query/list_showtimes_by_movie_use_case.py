from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_showtime_query_repo import (
    IShowtimeQueryRepo,
)
from cinema_booking.service.reservation.domain.entity.showtime_entity import Showtime


class ListShowtimesByMovieUseCase:
    def __init__(self, *, showtime_query_repo: IShowtimeQueryRepo) -> None:
        self.showtime_query_repo = showtime_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(Provide[Container.showtime_query_repo]),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo)

    @Logger.io
    async def execute(self, *, movie_id: int) -> List[Showtime]:
        return await self.showtime_query_repo.list_by_movie(movie_id=movie_id)
