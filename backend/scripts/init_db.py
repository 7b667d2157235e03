"""Initialize the database - creates all tables."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from estimator.database import init_schema


def init_db():
    print("Creating all database tables...")
    init_schema()
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
