from sqlalchemy.orm import Session

from partsledger.models.part import Part
from partsledger.models.vendor import Vendor
from partsledger.repositories.base import BaseRepository


class PartRepository(BaseRepository[Part]):

    def __init__(self, db: Session):
        super().__init__(Part, db)


class VendorRepository(BaseRepository[Vendor]):

    def __init__(self, db: Session):
        super().__init__(Vendor, db)
