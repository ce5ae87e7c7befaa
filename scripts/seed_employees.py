"""
Seed demo AI employee listings.
Run: python -m scripts.seed_employees
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.db.models.ai_employee import AIEmployee
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

AVATAR = "https://api.dicebear.com/6.x/bottts/svg?seed={}"

DEMO_EMPLOYEES = [
    {
        "employee_code": "AI-0001",
        "name": "Data Analyst Alex",
        "category": "tech",
        "description": "Turns sales, behaviour and market data into dashboards and decisions.",
        "hourly_rate": 45,
        "monthly_rate": 5800,
    },
    {
        "employee_code": "AI-0002",
        "name": "Content Creator Bella",
        "category": "retail",
        "description": "Copywriting, campaign planning and social media content.",
        "hourly_rate": 35,
        "monthly_rate": 4200,
    },
    {
        "employee_code": "AI-0003",
        "name": "Support Agent Charlie",
        "category": "retail",
        "description": "Round-the-clock customer support over chat, email and phone.",
        "hourly_rate": 25,
        "monthly_rate": 3000,
    },
    {
        "employee_code": "AI-0004",
        "name": "Developer David",
        "category": "tech",
        "description": "Full-stack coding, system design, debugging and API documentation.",
        "hourly_rate": 60,
        "monthly_rate": 8000,
    },
    {
        "employee_code": "AI-0005",
        "name": "Finance Advisor Emma",
        "category": "finance",
        "description": "Financial analysis, budgeting and cost control.",
        "hourly_rate": 55,
        "monthly_rate": 7000,
    },
    {
        "employee_code": "AI-0006",
        "name": "Health Assistant Frank",
        "category": "healthcare",
        "description": "Health information, symptom triage and clinic data analysis.",
        "hourly_rate": 50,
        "monthly_rate": 6500,
    },
]


def seed_employees() -> int:
    """Insert demo listings whose code is not present yet. Returns the number inserted."""
    init_db()
    db = SessionLocal()
    inserted = 0
    try:
        for data in DEMO_EMPLOYEES:
            if db.query(AIEmployee).filter(AIEmployee.employee_code == data["employee_code"]).first():
                continue
            first_name = data["name"].split()[-1]
            db.add(AIEmployee(avatar_url=AVATAR.format(first_name), **data))
            inserted += 1
        db.commit()
        logger.info(f"Seeded {inserted} AI employee(s)")
        return inserted
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_employees()
