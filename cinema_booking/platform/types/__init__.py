from cinema_booking.platform.types.uuid7_utils_types import UtilsUUID7

__all__ = ['UtilsUUID7']
