"""
Demo data generator - fills an empty store with users, products, pickup
locations and roughly two years of orders.

All randomness comes from one seeded numpy Generator, so the same seed and
the same "today" always produce the same data.
"""
import calendar
import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional, Sequence, TypeVar

import numpy as np

from models.user import User, Role
from models.product import Product, PickupLocation
from models.order import Order, OrderState, Customer
from database.repository import (
    UserRepository, ProductRepository, PickupLocationRepository, OrderRepository
)
from .password_service import PasswordService

logger = logging.getLogger(__name__)

T = TypeVar("T")

FILLING = ["Strawberry", "Chocolate", "Blueberry", "Raspberry", "Vanilla"]
BAKED_GOODS = ["Cake", "Pastry", "Tart", "Muffin", "Biscuit", "Bread", "Bagel",
               "Bun", "Brownie", "Cookie", "Cracker", "Cheese Cake"]
FIRST_NAME = ["Ori", "Amanda", "Octavia", "Laurel", "Lael", "Delilah", "Jason", "Skyler",
              "Arsenio", "Haley", "Lionel", "Sylvia", "Jessica", "Lester", "Ferdinand",
              "Elaine", "Griffin", "Kerry", "Dominique"]
LAST_NAME = ["Carter", "Castro", "Rich", "Irwin", "Moore", "Hendricks", "Huber", "Patton",
             "Wilkinson", "Thornton", "Nunez", "Macias", "Gallegos", "Blevins", "Mejia",
             "Pickett", "Whitney", "Farmer", "Henry", "Chen", "Macias", "Rowland", "Pierce",
             "Cortez", "Noble", "Howard", "Nixon", "Mcbride", "Leblanc", "Russell", "Carver",
             "Benton", "Maldonado", "Lyons"]

YEARS_TO_INCLUDE = 2
PRODUCTS_IN_USE = 8
DELETABLE_PRODUCTS = 4
GAUSSIAN_CUTOFF = 2.5
PROBLEM_MESSAGE = "Can't make it. Did not get any ingredients this morning"
# Smallest gap between two history entries when a drawn timestamp collides
MIN_HISTORY_STEP = timedelta(minutes=15)


def format_phone_number(number: int) -> str:
    return f"+1-555-{number:04d}"


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


class DataGenerator:
    # Builds demo data bottom-up: users -> products -> pickup locations -> orders

    def __init__(self, user_repository: UserRepository, product_repository: ProductRepository,
                 pickup_location_repository: PickupLocationRepository,
                 order_repository: OrderRepository, password_service: PasswordService,
                 seed: int = 1, today: Optional[date] = None):
        self.user_repo = user_repository
        self.product_repo = product_repository
        self.pickup_location_repo = pickup_location_repository
        self.order_repo = order_repository
        self.password_service = password_service
        self.random = np.random.default_rng(seed)
        self.today = today or date.today()

    def is_seeded(self) -> bool:
        # Any existing user means the store was populated before
        return self.user_repo.count() > 0

    def load_data(self) -> bool:
        """Generate and persist the demo data set.

        Returns False without writing anything when the store already has
        users. Persistence and hashing errors are not caught: a failed run
        leaves whatever was written so far in place.
        """
        if self.is_seeded():
            logger.info("Using existing database")
            return False

        logger.info("Generating demo data")

        logger.info("... generating users")
        baker = self._create_baker()
        barista = self._create_barista()
        self._create_admin()
        self._create_deletable_users()

        logger.info("... generating products")
        product_supplier = self._create_products(PRODUCTS_IN_USE)
        # Products without any order referencing them
        self._create_products(DELETABLE_PRODUCTS)

        logger.info("... generating pickup locations")
        pickup_location_supplier = self._create_pickup_locations()

        logger.info("... generating orders")
        orders = self._create_orders(product_supplier, pickup_location_supplier, barista, baker)

        logger.info("Generated demo data (%d orders)", len(orders))
        return True

    # === Random helpers ===
    def _random_int(self, bound: int) -> int:
        return int(self.random.integers(bound))

    def _random_bool(self) -> bool:
        return self._random_int(2) == 1

    def _random_choice(self, values: Sequence[T]) -> T:
        return values[self._random_int(len(values))]

    def random_phone(self) -> str:
        return format_phone_number(self._random_int(10000))

    def random_price(self) -> int:
        # Minor currency units in [200, 10200)
        return int((2.0 + self.random.random() * 100.0) * 100.0)

    def gaussian_index(self, size: int) -> int:
        """Pick an index in [0, size) with most of the weight around the middle."""
        g = float(self.random.standard_normal())
        g = min(GAUSSIAN_CUTOFF, max(-GAUSSIAN_CUTOFF, g))
        g = (g + GAUSSIAN_CUTOFF) / (GAUSSIAN_CUTOFF * 2.0)
        return int(g * (size - 1))

    def random_product_name(self) -> str:
        first_filling = self._random_choice(FILLING)
        name = first_filling
        if self._random_bool():
            second_filling = self._random_choice(FILLING)
            while second_filling == first_filling:
                second_filling = self._random_choice(FILLING)
            name = f"{first_filling} {second_filling}"
        return f"{name} {self._random_choice(BAKED_GOODS)}"

    def _random_due_time(self) -> time:
        return time(8 + 4 * self._random_int(3), 0)

    def get_random_state(self, due: date) -> OrderState:
        """Draw a plausible state for an order due on the given date."""
        tomorrow = self.today + timedelta(days=1)
        two_days = self.today + timedelta(days=2)

        if due < self.today:
            return OrderState.DELIVERED if self.random.random() < 0.9 else OrderState.CANCELLED

        if due > two_days:
            return OrderState.NEW

        resolution = self.random.random()
        if due > tomorrow:
            if resolution < 0.8:
                return OrderState.NEW
            if resolution < 0.9:
                return OrderState.PROBLEM
            return OrderState.CANCELLED

        if resolution < 0.6:
            return OrderState.READY
        if resolution < 0.8:
            return OrderState.DELIVERED
        if resolution < 0.9:
            return OrderState.PROBLEM
        return OrderState.CANCELLED

    # === Users ===
    def _create_user(self, email: str, first_name: str, last_name: str,
                     password: str, role: Role, locked: bool) -> User:
        return self.user_repo.save(User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=self.password_service.hash(password),
            role=role,
            locked=locked
        ))

    def _create_baker(self) -> User:
        return self._create_user("baker@vaadin.com", "Heidi", "Carter", "baker", Role.BAKER, False)

    def _create_barista(self) -> User:
        return self._create_user("barista@vaadin.com", "Malin", "Castro", "barista", Role.BARISTA, True)

    def _create_admin(self) -> User:
        return self._create_user("admin@vaadin.com", "Göran", "Rich", "admin", Role.ADMIN, True)

    def _create_deletable_users(self):
        self._create_user("peter@vaadin.com", "Peter", "Bush", "peter", Role.BARISTA, False)
        self._create_user("mary@vaadin.com", "Mary", "Ocon", "mary", Role.BAKER, True)

    # === Products and pickup locations ===
    def _create_products(self, number_of_items: int) -> Callable[[], Product]:
        products = []
        for _ in range(number_of_items):
            product = Product(name=self.random_product_name(), price=self.random_price())
            products.append(self.product_repo.save(product))
        return lambda: products[self.gaussian_index(len(products))]

    def _create_pickup_locations(self) -> Callable[[], PickupLocation]:
        pickup_locations = [
            self.pickup_location_repo.save(PickupLocation(name="Store")),
            self.pickup_location_repo.save(PickupLocation(name="Bakery")),
        ]
        return lambda: self._random_choice(pickup_locations)

    # === Orders ===
    def _create_orders(self, product_supplier: Callable[[], Product],
                       pickup_location_supplier: Callable[[], PickupLocation],
                       barista: User, baker: User) -> List[Order]:
        oldest_date = date(self.today.year - YEARS_TO_INCLUDE, 1, 1)
        newest_date = add_months(self.today, 1)

        # The first order of the day: one item, only the "placed" entry
        order = self._create_order(product_supplier, pickup_location_supplier,
                                   barista, baker, self.today)
        order.due_time = time(8, 0)
        order.history = order.history[:1]
        order.items = order.items[:1]
        order.state = OrderState.NEW
        orders = [order]

        due_date = oldest_date
        while due_date < newest_date:
            # Demand grows slowly month over month
            relative_year = due_date.year - self.today.year + YEARS_TO_INCLUDE
            relative_month = relative_year * 12 + due_date.month
            multiplier = 1.0 + 0.03 * relative_month
            orders_this_day = int(self._random_int(10) + multiplier)
            for _ in range(orders_this_day):
                orders.append(self._create_order(product_supplier, pickup_location_supplier,
                                                 barista, baker, due_date))
            due_date += timedelta(days=1)

        return self.order_repo.save_all(orders)

    def _fill_customer(self, customer: Customer):
        customer.full_name = f"{self._random_choice(FIRST_NAME)} {self._random_choice(LAST_NAME)}"
        customer.phone_number = self.random_phone()
        if self._random_int(10) == 0:
            customer.details = "Very important customer"

    def _create_order(self, product_supplier: Callable[[], Product],
                      pickup_location_supplier: Callable[[], PickupLocation],
                      barista: User, baker: User, due_date: date) -> Order:
        order = Order(created_by=barista)

        self._fill_customer(order.customer)
        order.pickup_location = pickup_location_supplier()
        order.due_date = due_date
        order.due_time = self._random_due_time()
        state = self.get_random_state(due_date)

        item_count = self._random_int(3) + 1
        for _ in range(item_count):
            product = product_supplier()
            while order.contains_product(product):
                product = product_supplier()
            quantity = self._random_int(10) + 1
            comment = None
            if self._random_int(5) == 0:
                comment = "Lactose free" if self._random_bool() else "Gluten free"
            order.add_item(product, quantity, comment)

        self._replay_history(order, state, barista, baker)
        return order

    def _replay_history(self, order: Order, state: OrderState, barista: User, baker: User):
        """Walk the order through the states leading to `state` with backdated timestamps."""
        placed_on = order.due_date - timedelta(days=self._random_int(5) + 2)
        order_placed = datetime.combine(placed_on, time(self._random_int(10) + 7, 0))
        order.change_state(barista, OrderState.NEW, timestamp=order_placed)

        if state == OrderState.CANCELLED:
            days_until_due = max(1, (order.due_datetime - order_placed).days)
            cancelled = order_placed + timedelta(days=self._random_int(days_until_due))
            order.change_state(barista, OrderState.CANCELLED, timestamp=cancelled)
            return

        if state == OrderState.NEW:
            return

        confirmed = order_placed + timedelta(days=self._random_int(2), hours=self._random_int(5))
        if confirmed <= order_placed:
            confirmed = order_placed + MIN_HISTORY_STEP
        order.change_state(baker, OrderState.CONFIRMED, timestamp=confirmed)

        if state == OrderState.PROBLEM:
            problem = datetime.combine(order.due_date, time(self._random_int(4) + 4, 0))
            order.change_state(baker, OrderState.PROBLEM, PROBLEM_MESSAGE, timestamp=problem)
        elif state in (OrderState.READY, OrderState.DELIVERED):
            ready = datetime.combine(order.due_date,
                                     time(self._random_int(2) + 8, 0 if self._random_bool() else 30))
            if state == OrderState.READY:
                order.change_state(baker, OrderState.READY, timestamp=ready)
                return

            delivered = order.due_datetime - timedelta(minutes=self._random_int(120))
            if ready >= delivered:
                ready = delivered - MIN_HISTORY_STEP
            order.change_state(baker, OrderState.READY, timestamp=ready)
            order.change_state(baker, OrderState.DELIVERED, timestamp=delivered)
