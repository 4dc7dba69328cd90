from sqlalchemy import create_engine, Column, Integer, String, Float, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime, timezone

from config import DATABASE_URL, STARTING_BALANCE

engine = create_engine(DATABASE_URL, echo=False)
SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()

class Player(Base):
    __tablename__ = 'players'
    id = Column(Integer, primary_key=True)
    username = Column(String, unique=True, index=True)
    balance = Column(Float, default=STARTING_BALANCE)
    server_seed = Column(String, nullable=False)
    server_seed_hash = Column(String, nullable=False)
    client_seed = Column(String, default="client-seed")
    nonce = Column(Integer, default=0)

class PlayHistory(Base):
    __tablename__ = 'plays'
    id = Column(Integer, primary_key=True)
    player_id = Column(Integer, index=True)
    cost = Column(Float)
    prize = Column(Integer)
    symbols = Column(String)  # "DD 0 C"
    nonce = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            'id': self.id,
            'symbols': self.symbols.split(' '),
            'cost': self.cost,
            'prize': self.prize,
            'nonce': self.nonce,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


def init_db():
    Base.metadata.create_all(engine)
