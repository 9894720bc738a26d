"""
Database connection management
"""
import logging
import sqlite3
from contextlib import contextmanager
from typing import Generator

logger = logging.getLogger(__name__)


class DatabaseConnection:
    # Owns the database file location and the schema

    def __init__(self, db_path: str = "bakery.db"):
        # Database file path, tables are created on first use
        self.db_path = db_path
        self.init_database()

    def init_database(self):
        # Create every table the repositories rely on
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Users (
                user_id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT NOT NULL UNIQUE,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                password_hash TEXT NOT NULL,
                role TEXT NOT NULL,
                locked INTEGER NOT NULL DEFAULT 0
            )
            ''')

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Products (
                product_id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                price INTEGER NOT NULL
            )
            ''')

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Pickup_Locations (
                pickup_location_id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL
            )
            ''')

            # Customer columns are embedded, a customer belongs to one order
            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Orders (
                order_id INTEGER PRIMARY KEY AUTOINCREMENT,
                customer_full_name TEXT NOT NULL,
                customer_phone_number TEXT NOT NULL,
                customer_details TEXT,
                pickup_location_id INTEGER,
                due_date TEXT NOT NULL,
                due_time TEXT NOT NULL,
                state TEXT NOT NULL,
                created_by INTEGER NOT NULL,
                FOREIGN KEY(pickup_location_id) REFERENCES Pickup_Locations(pickup_location_id),
                FOREIGN KEY(created_by) REFERENCES Users(user_id)
            )
            ''')

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Order_Items (
                order_item_id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id INTEGER NOT NULL,
                product_id INTEGER NOT NULL,
                quantity INTEGER NOT NULL CHECK (quantity > 0),
                comment TEXT,
                UNIQUE(order_id, product_id),
                FOREIGN KEY(order_id) REFERENCES Orders(order_id),
                FOREIGN KEY(product_id) REFERENCES Products(product_id)
            )
            ''')

            # Rows are append-only, ordering follows history_item_id
            cursor.execute('''
            CREATE TABLE IF NOT EXISTS History_Items (
                history_item_id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id INTEGER NOT NULL,
                created_by INTEGER NOT NULL,
                message TEXT NOT NULL,
                new_state TEXT,
                timestamp TEXT NOT NULL,
                FOREIGN KEY(order_id) REFERENCES Orders(order_id),
                FOREIGN KEY(created_by) REFERENCES Users(user_id)
            )
            ''')

            cursor.execute('CREATE INDEX IF NOT EXISTS idx_orders_due_date ON Orders(due_date)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_history_order ON History_Items(order_id)')

            conn.commit()

        logger.debug("Database schema ready at %s", self.db_path)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        # Context manager that always closes the connection
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()
