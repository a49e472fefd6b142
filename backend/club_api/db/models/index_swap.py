"""IndexSwap model: peer tutorial-index swap requests."""

from sqlalchemy import Column, String

from club_api.db.base import Base, new_id


class IndexSwap(Base):
    __tablename__ = "index_swaps"

    id = Column(String(36), primary_key=True, default=new_id)

    # Natural key: (student_name, module_name, module_code, have_index, want_index)
    student_name = Column(String(255), nullable=False)
    module_name = Column(String(255), nullable=False)
    module_code = Column(String(50), nullable=False, index=True)
    have_index = Column(String(50), nullable=False)
    want_index = Column(String(50), nullable=False)

    # Contact details
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    tele_handle = Column(String(100), nullable=True)
