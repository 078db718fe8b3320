from typing import List, Optional

from sqlalchemy.orm import Session

from partsledger.models.reorder_alert import ReorderAlert, ALERT_PENDING
from partsledger.repositories.base import BaseRepository


class ReorderAlertRepository(BaseRepository[ReorderAlert]):

    def __init__(self, db: Session):
        super().__init__(ReorderAlert, db)

    def get_pending_by_part(self, part_id: int) -> Optional[ReorderAlert]:
        return (
            self.db.query(ReorderAlert)
            .filter(
                ReorderAlert.part_id == part_id,
                ReorderAlert.status == ALERT_PENDING,
            )
            .first()
        )

    def get_for_update(self, alert_id: int) -> Optional[ReorderAlert]:
        return (
            self.db.query(ReorderAlert)
            .filter(ReorderAlert.id == alert_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def list_pending(self) -> List[ReorderAlert]:
        return (
            self.db.query(ReorderAlert)
            .filter(ReorderAlert.status == ALERT_PENDING)
            .order_by(ReorderAlert.id)
            .all()
        )

    def list_filtered(self, status: Optional[str] = None, limit: Optional[int] = 50) -> List[ReorderAlert]:
        q = self.db.query(ReorderAlert)
        if status:
            q = q.filter(ReorderAlert.status == status)
        return q.order_by(ReorderAlert.created_at.desc(), ReorderAlert.id.desc()).limit(limit).all()
