
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import DATABASE_URL
from store.database import get_engine, init_db, make_session_factory
from store import models
import logging

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAMPLE_TOPICS = {
    "Kinematics": 30,
    "Laws of Motion": 50,
    "Work, Energy and Power": 20,
}


def seed_sample_data(session_factory):
    """Insert a small exam hierarchy so the form has something to show"""
    with session_factory() as db:
        exam = models.Exam(name="JEE")
        db.add(exam)
        db.flush()
        course = models.Course(exam_id=exam.id, name="JEE Main")
        db.add(course)
        db.flush()
        subject = models.Subject(course_id=course.id, name="Physics")
        db.add(subject)
        db.flush()
        unit = models.Unit(subject_id=subject.id, name="Mechanics")
        db.add(unit)
        db.flush()
        chapter = models.Chapter(unit_id=unit.id, name="Motion")
        db.add(chapter)
        db.flush()

        for name, weightage in SAMPLE_TOPICS.items():
            db.add(models.Topic(chapter_id=chapter.id, name=name, weightage=weightage))

        db.add(models.Part(course_id=course.id, name="Section A"))
        db.add(models.Slot(course_id=course.id, name="Shift 1"))
        db.commit()

    logger.info(f"✓ Seeded sample exam with {len(SAMPLE_TOPICS)} topics")


def setup_database(force_recreate: bool = False, seed: bool = False):
    """Create the question bank tables"""

    logger.info("="*80)
    logger.info("QUESTION BANK SETUP")
    logger.info("="*80)

    logger.info(f"\n[Step 1/2] Creating tables at {DATABASE_URL.split('@')[-1]}...")
    engine = get_engine()
    init_db(engine, drop_existing=force_recreate)
    logger.info("✓ Tables ready")

    if seed:
        logger.info("\n[Step 2/2] Seeding sample data...")
        seed_sample_data(make_session_factory(engine))
    else:
        logger.info("\n[Step 2/2] Skipping sample data (use --seed to add it)")

    logger.info("\n" + "="*80)
    logger.info("QUESTION BANK SETUP COMPLETE!")
    logger.info("="*80)
    logger.info("\nYou can now run the Streamlit app with: streamlit run ui/app.py")

    return True


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create the question bank tables")
    parser.add_argument("--force", action="store_true", help="Drop and recreate all tables")
    parser.add_argument("--seed", action="store_true", help="Insert a sample exam hierarchy")
    args = parser.parse_args()

    success = setup_database(force_recreate=args.force, seed=args.seed)

    if not success:
        sys.exit(1)
