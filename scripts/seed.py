# scripts/seed.py

from datetime import date
import logging

from sqlalchemy.engine import Engine

from dashboard.auth import create_user
from dashboard.config import get_settings
from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices, metadata, revenue, users

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


# ---- Placeholder data ----

USERS = [
    {"name": "User", "email": "user@nextmail.com", "password": "123456"},
]

CUSTOMERS = [
    {"id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa", "name": "Evil Rabbit", "email": "evil@rabbit.com"},
    {"id": "3958dc9e-712f-4377-85e9-fec4b6a6442a", "name": "Delba de Oliveira", "email": "delba@oliveira.com"},
    {"id": "3958dc9e-742f-4377-85e9-fec4b6a6442a", "name": "Lee Robinson", "email": "lee@robinson.com"},
    {"id": "76d65c26-f784-44a2-ac19-586678f7c2f2", "name": "Michael Novotny", "email": "michael@novotny.com"},
    {"id": "cc27c14a-0acf-4f4a-a6c9-d45682c144b9", "name": "Amy Burns", "email": "amy@burns.com"},
    {"id": "13d07535-c59e-4157-a011-f8d2ef4e0cbb", "name": "Balazs Orban", "email": "balazs@orban.com"},
]

INVOICES = [
    {"customer_id": CUSTOMERS[0]["id"], "amount": 15795, "status": "pending", "date": date(2022, 12, 6)},
    {"customer_id": CUSTOMERS[1]["id"], "amount": 20348, "status": "pending", "date": date(2022, 11, 14)},
    {"customer_id": CUSTOMERS[4]["id"], "amount": 3040, "status": "paid", "date": date(2022, 10, 29)},
    {"customer_id": CUSTOMERS[3]["id"], "amount": 44800, "status": "paid", "date": date(2023, 9, 10)},
    {"customer_id": CUSTOMERS[5]["id"], "amount": 34577, "status": "pending", "date": date(2023, 8, 5)},
    {"customer_id": CUSTOMERS[2]["id"], "amount": 54246, "status": "pending", "date": date(2023, 7, 16)},
    {"customer_id": CUSTOMERS[0]["id"], "amount": 666, "status": "pending", "date": date(2023, 6, 27)},
    {"customer_id": CUSTOMERS[3]["id"], "amount": 32545, "status": "paid", "date": date(2023, 6, 9)},
    {"customer_id": CUSTOMERS[4]["id"], "amount": 1250, "status": "paid", "date": date(2023, 6, 17)},
    {"customer_id": CUSTOMERS[5]["id"], "amount": 8546, "status": "paid", "date": date(2023, 6, 7)},
    {"customer_id": CUSTOMERS[1]["id"], "amount": 500, "status": "paid", "date": date(2023, 8, 19)},
    {"customer_id": CUSTOMERS[5]["id"], "amount": 8945, "status": "paid", "date": date(2023, 6, 3)},
    {"customer_id": CUSTOMERS[2]["id"], "amount": 1000, "status": "paid", "date": date(2022, 6, 5)},
]

REVENUE = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 2200},
    {"month": "Apr", "revenue": 2500},
    {"month": "May", "revenue": 2300},
    {"month": "Jun", "revenue": 3200},
    {"month": "Jul", "revenue": 3500},
    {"month": "Aug", "revenue": 3700},
    {"month": "Sep", "revenue": 2500},
    {"month": "Oct", "revenue": 2800},
    {"month": "Nov", "revenue": 3000},
    {"month": "Dec", "revenue": 4800},
]


def seed(engine: Engine) -> dict:
    """
    Rebuild every table from the placeholder data above.

    Returns row counts per table.
    """
    image_url = get_settings().customer_image_url

    metadata.create_all(engine)

    with engine.begin() as conn:
        # Children first so the FK never dangles
        conn.execute(invoices.delete())
        conn.execute(customers.delete())
        conn.execute(users.delete())
        conn.execute(revenue.delete())

        for user in USERS:
            create_user(conn, user["name"], user["email"], user["password"])

        conn.execute(
            customers.insert(),
            [{**c, "image_url": image_url} for c in CUSTOMERS],
        )
        conn.execute(invoices.insert(), INVOICES)
        conn.execute(revenue.insert(), REVENUE)

    return {
        "users": len(USERS),
        "customers": len(CUSTOMERS),
        "invoices": len(INVOICES),
        "revenue": len(REVENUE),
    }


def main():
    counts = seed(get_engine())

    logger.info("Users seeded:      %s", counts["users"])
    logger.info("Customers seeded:  %s", counts["customers"])
    logger.info("Invoices seeded:   %s", counts["invoices"])
    logger.info("Revenue months:    %s", counts["revenue"])


if __name__ == "__main__":
    main()
