"""
Database repository classes
"""
import sqlite3
from collections import defaultdict
from datetime import date, datetime, time
from typing import List, Optional, Dict, Iterable, Tuple

from models.user import User, Role
from models.product import Product, PickupLocation
from models.order import Order, OrderItem, OrderState, HistoryItem, Customer
from .connection import DatabaseConnection


def _user_from_row(row) -> User:
    return User(
        user_id=row[0],
        email=row[1],
        first_name=row[2],
        last_name=row[3],
        password_hash=row[4],
        role=Role(row[5]),
        locked=bool(row[6])
    )


_USER_COLUMNS = "user_id, email, first_name, last_name, password_hash, role, locked"


class UserRepository:
    # User data access layer

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def save(self, user: User) -> User:
        # Insert a new user or update an existing one, returns the stored user
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            if user.user_id is None:
                cursor.execute("""
                INSERT INTO Users (email, first_name, last_name, password_hash, role, locked)
                VALUES (?, ?, ?, ?, ?, ?)
                """, (
                    user.email, user.first_name, user.last_name,
                    user.password_hash, user.role.value, int(user.locked)
                ))
                user.user_id = cursor.lastrowid
            else:
                cursor.execute("""
                UPDATE Users SET email = ?, first_name = ?, last_name = ?,
                                 password_hash = ?, role = ?, locked = ?
                WHERE user_id = ?
                """, (
                    user.email, user.first_name, user.last_name,
                    user.password_hash, user.role.value, int(user.locked), user.user_id
                ))

            conn.commit()
            return user

    def count(self) -> int:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM Users")
            return cursor.fetchone()[0]

    def find_by_email(self, email: str) -> Optional[User]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM Users WHERE email = ?", (email,))
            row = cursor.fetchone()
            return _user_from_row(row) if row else None

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM Users WHERE user_id = ?", (user_id,))
            row = cursor.fetchone()
            return _user_from_row(row) if row else None


class ProductRepository:
    # Product data access layer

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def save(self, product: Product) -> Product:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            if product.product_id is None:
                cursor.execute("INSERT INTO Products (name, price) VALUES (?, ?)",
                               (product.name, product.price))
                product.product_id = cursor.lastrowid
            else:
                cursor.execute("UPDATE Products SET name = ?, price = ? WHERE product_id = ?",
                               (product.name, product.price, product.product_id))

            conn.commit()
            return product

    def find_all(self) -> List[Product]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT product_id, name, price FROM Products ORDER BY product_id")
            return [Product(product_id=row[0], name=row[1], price=row[2])
                    for row in cursor.fetchall()]


class PickupLocationRepository:
    # Pickup location data access layer

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def save(self, pickup_location: PickupLocation) -> PickupLocation:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            if pickup_location.pickup_location_id is None:
                cursor.execute("INSERT INTO Pickup_Locations (name) VALUES (?)",
                               (pickup_location.name,))
                pickup_location.pickup_location_id = cursor.lastrowid
            else:
                cursor.execute("UPDATE Pickup_Locations SET name = ? WHERE pickup_location_id = ?",
                               (pickup_location.name, pickup_location.pickup_location_id))

            conn.commit()
            return pickup_location

    def find_all(self) -> List[PickupLocation]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
            SELECT pickup_location_id, name FROM Pickup_Locations ORDER BY pickup_location_id
            """)
            return [PickupLocation(pickup_location_id=row[0], name=row[1])
                    for row in cursor.fetchall()]


class OrderRepository:
    # Order data access layer, an order is saved together with its items and history

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def save(self, order: Order) -> Order:
        # Insert a new order (cascading items and history) in one transaction
        with self.db.get_connection() as conn:
            self._insert_order(conn.cursor(), order)
            conn.commit()
            return order

    def save_all(self, orders: Iterable[Order]) -> List[Order]:
        # Insert many orders, either all of them are stored or none
        saved = []
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            for order in orders:
                self._insert_order(cursor, order)
                saved.append(order)
            conn.commit()
        return saved

    def update_state(self, order: Order, history_item: HistoryItem):
        # Persist the current state and one newly appended history entry
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("UPDATE Orders SET state = ? WHERE order_id = ?",
                           (order.state.value, order.order_id))
            self._insert_history(cursor, order.order_id, [history_item])
            conn.commit()

    def _insert_order(self, cursor: sqlite3.Cursor, order: Order):
        if order.order_id is not None:
            raise ValueError(f"Order {order.order_id} is already stored")

        cursor.execute("""
        INSERT INTO Orders (
            customer_full_name, customer_phone_number, customer_details,
            pickup_location_id, due_date, due_time, state, created_by
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            order.customer.full_name, order.customer.phone_number, order.customer.details,
            order.pickup_location.pickup_location_id if order.pickup_location else None,
            order.due_date.isoformat(), order.due_time.strftime("%H:%M"),
            order.state.value, order.created_by.user_id
        ))
        order.order_id = cursor.lastrowid

        for item in order.items:
            cursor.execute("""
            INSERT INTO Order_Items (order_id, product_id, quantity, comment)
            VALUES (?, ?, ?, ?)
            """, (order.order_id, item.product.product_id, item.quantity, item.comment))
            item.order_item_id = cursor.lastrowid

        self._insert_history(cursor, order.order_id, order.history)

    def _insert_history(self, cursor: sqlite3.Cursor, order_id: int, history: List[HistoryItem]):
        cursor.executemany("""
        INSERT INTO History_Items (order_id, created_by, message, new_state, timestamp)
        VALUES (?, ?, ?, ?, ?)
        """, [
            (order_id, item.created_by.user_id, item.message,
             item.new_state.value if item.new_state else None,
             item.timestamp.isoformat(timespec="seconds"))
            for item in history
        ])

    def get_order(self, order_id: int) -> Optional[Order]:
        with self.db.get_connection() as conn:
            orders = self._load_orders(conn, "WHERE o.order_id = ?", (order_id,))
            return orders[0] if orders else None

    def find_all(self) -> List[Order]:
        with self.db.get_connection() as conn:
            return self._load_orders(conn, "", ())

    def _load_orders(self, conn: sqlite3.Connection, where: str, params: Tuple) -> List[Order]:
        # Reference data is small, load it once and resolve ids in memory
        cursor = conn.cursor()

        cursor.execute(f"SELECT {_USER_COLUMNS} FROM Users")
        users = {row[0]: _user_from_row(row) for row in cursor.fetchall()}

        cursor.execute("SELECT product_id, name, price FROM Products")
        products = {row[0]: Product(product_id=row[0], name=row[1], price=row[2])
                    for row in cursor.fetchall()}

        cursor.execute("SELECT pickup_location_id, name FROM Pickup_Locations")
        locations = {row[0]: PickupLocation(pickup_location_id=row[0], name=row[1])
                     for row in cursor.fetchall()}

        cursor.execute(f"""
        SELECT o.order_item_id, o.order_id, o.product_id, o.quantity, o.comment
        FROM Order_Items o {where}
        ORDER BY o.order_item_id
        """, params)
        items: Dict[int, List[OrderItem]] = defaultdict(list)
        for row in cursor.fetchall():
            items[row[1]].append(OrderItem(
                order_item_id=row[0],
                product=products[row[2]],
                quantity=row[3],
                comment=row[4]
            ))

        cursor.execute(f"""
        SELECT o.order_id, o.created_by, o.message, o.new_state, o.timestamp
        FROM History_Items o {where}
        ORDER BY o.history_item_id
        """, params)
        history: Dict[int, List[HistoryItem]] = defaultdict(list)
        for row in cursor.fetchall():
            history[row[0]].append(HistoryItem(
                created_by=users[row[1]],
                message=row[2],
                new_state=OrderState(row[3]) if row[3] else None,
                timestamp=datetime.fromisoformat(row[4])
            ))

        cursor.execute(f"""
        SELECT o.order_id, o.customer_full_name, o.customer_phone_number, o.customer_details,
               o.pickup_location_id, o.due_date, o.due_time, o.state, o.created_by
        FROM Orders o {where}
        ORDER BY o.order_id
        """, params)

        orders = []
        for row in cursor.fetchall():
            orders.append(Order(
                order_id=row[0],
                customer=Customer(full_name=row[1], phone_number=row[2], details=row[3]),
                pickup_location=locations.get(row[4]),
                due_date=date.fromisoformat(row[5]),
                due_time=time.fromisoformat(row[6]),
                state=OrderState(row[7]),
                created_by=users[row[8]],
                items=items.get(row[0], []),
                history=history.get(row[0], [])
            ))

        return orders

    def count(self) -> int:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM Orders")
            return cursor.fetchone()[0]

    # === Dashboard aggregates ===
    def count_by_state(self, state: OrderState) -> int:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM Orders WHERE state = ?", (state.value,))
            return cursor.fetchone()[0]

    def count_by_due_date(self, due_date: date) -> int:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM Orders WHERE due_date = ?",
                           (due_date.isoformat(),))
            return cursor.fetchone()[0]

    def count_by_due_date_and_state(self, due_date: date, state: OrderState) -> int:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM Orders WHERE due_date = ? AND state = ?",
                           (due_date.isoformat(), state.value))
            return cursor.fetchone()[0]

    def count_delivered_per_day(self, year: int, month: int) -> Dict[int, int]:
        # Delivered orders grouped by day of month
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
            SELECT CAST(substr(due_date, 9, 2) AS INTEGER), COUNT(*)
            FROM Orders
            WHERE state = ? AND substr(due_date, 1, 7) = ?
            GROUP BY due_date
            """, (OrderState.DELIVERED.value, f"{year:04d}-{month:02d}"))
            return {row[0]: row[1] for row in cursor.fetchall()}

    def count_delivered_per_month(self, year: int) -> Dict[int, int]:
        # Delivered orders grouped by month
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
            SELECT CAST(substr(due_date, 6, 2) AS INTEGER) AS month, COUNT(*)
            FROM Orders
            WHERE state = ? AND substr(due_date, 1, 4) = ?
            GROUP BY month
            """, (OrderState.DELIVERED.value, f"{year:04d}"))
            return {row[0]: row[1] for row in cursor.fetchall()}

    def sales_per_month(self, year: int) -> Dict[int, int]:
        # Sum of quantity * price for delivered orders, grouped by month
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
            SELECT CAST(substr(o.due_date, 6, 2) AS INTEGER) AS month,
                   SUM(oi.quantity * p.price)
            FROM Orders o
            JOIN Order_Items oi ON oi.order_id = o.order_id
            JOIN Products p ON p.product_id = oi.product_id
            WHERE o.state = ? AND substr(o.due_date, 1, 4) = ?
            GROUP BY month
            """, (OrderState.DELIVERED.value, f"{year:04d}"))
            return {row[0]: row[1] for row in cursor.fetchall()}

    def product_deliveries(self, year: int, month: int) -> List[Tuple[str, int]]:
        # Delivered quantity per product for one month, largest first
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
            SELECT p.name, SUM(oi.quantity) AS delivered
            FROM Orders o
            JOIN Order_Items oi ON oi.order_id = o.order_id
            JOIN Products p ON p.product_id = oi.product_id
            WHERE o.state = ? AND substr(o.due_date, 1, 7) = ?
            GROUP BY p.product_id, p.name
            ORDER BY delivered DESC, p.name ASC
            """, (OrderState.DELIVERED.value, f"{year:04d}-{month:02d}"))
            return [(row[0], row[1]) for row in cursor.fetchall()]
