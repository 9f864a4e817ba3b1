"""Lookups over the airport and station cache tables."""

from typing import List, Sequence

from sqlalchemy.orm import Session

from . import models


class GeoRepository:
    """Identifier and bounding-box queries for one geo table.

    Both tables share the same shape, so a single class covers them; only the
    model and the natural-key column differ.
    """

    def __init__(self, model, key_column):
        self.model = model
        self.key_column = key_column

    def find_by_id(self, db: Session, ident: str):
        return db.query(self.model).filter(self.key_column == ident).first()

    def find_in_bounding_box(
        self,
        db: Session,
        min_lat: float,
        max_lat: float,
        min_lon: float,
        max_lon: float,
    ) -> List:
        # Inclusive on both axes. Rows without coordinates never match.
        return (
            db.query(self.model)
            .filter(self.model.latitude.between(min_lat, max_lat))
            .filter(self.model.longitude.between(min_lon, max_lon))
            .all()
        )

    def bulk_insert(self, db: Session, rows: Sequence) -> int:
        db.add_all(rows)
        db.commit()
        return len(rows)

    def count(self, db: Session) -> int:
        return db.query(self.model).count()


airports = GeoRepository(models.AirportCache, models.AirportCache.airport_id)
stations = GeoRepository(models.StationCache, models.StationCache.station_id)
