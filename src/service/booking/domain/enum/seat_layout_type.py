from enum import StrEnum


class SeatLayoutType(StrEnum):
    STANDARD = 'standard'
    THEATER = 'theater'
    STADIUM = 'stadium'
    VIP = 'vip'
