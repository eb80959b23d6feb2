import logging

from tracker.core.security import hash_password
from tracker.db.base import Base
from tracker.db.session import SessionLocal, engine
from tracker.models import AssessmentType, User, UserRole
from tracker.services.grading_periods import DEFAULT_ASSESSMENT_TYPES

logger = logging.getLogger(__name__)


def seed_demo_data() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).first():
            return

        teacher = User(
            full_name="Demo Teacher",
            email="teacher@example.com",
            password_hash=hash_password("teacher123"),
            role=UserRole.teacher,
        )
        db.add(teacher)
        db.flush()

        db.add_all([
            AssessmentType(
                name=name,
                percentage_weight=weight,
                is_active=True,
                is_default=True,
                owner_id=teacher.id,
            )
            for name, weight in DEFAULT_ASSESSMENT_TYPES
        ])

        db.commit()
        logger.info("Seeded demo teacher %s", teacher.email)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_demo_data()
