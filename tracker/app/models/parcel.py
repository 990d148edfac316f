"""
Parcel database model.

Column order matters: rows are decoded positionally in this order.
"""

from sqlalchemy import Column, Integer, String
from tracker.app.db.session import Base


class Parcel(Base):
    """
    Parcel model for the tracker.
    
    A parcel belongs to a client and moves through the statuses in ParcelStatus.
    The status column is free text; the store does not enforce the enum.
    """
    __tablename__ = "parcel"
    
    number = Column(Integer, primary_key=True, autoincrement=True)
    
    # Ownership - plain indexed value, no foreign key
    client = Column(Integer, nullable=False, index=True)
    
    status = Column(String, nullable=False)
    address = Column(String, nullable=False)
    
    # RFC3339 string, written once at insert
    created_at = Column(String, nullable=False)
    
    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
