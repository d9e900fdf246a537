from abc import ABC, abstractmethod
from typing import List, Optional

from cinema_booking.service.reservation.domain.entity.showtime_entity import Showtime


class IShowtimeQueryRepo(ABC):
    """Read-only view of the catalog's showtimes"""

    @abstractmethod
    async def get_by_id(self, *, showtime_id: int) -> Optional[Showtime]:
        pass

    @abstractmethod
    async def list_by_movie(self, *, movie_id: int) -> List[Showtime]:
        """Showtimes of a movie ordered by start time"""
        pass
