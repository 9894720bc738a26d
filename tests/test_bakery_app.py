"""
Basic tests for application wiring and the seeding script
"""
import os
import tempfile
import unittest
from datetime import date
from unittest import mock

from config import load_settings
from core.bakery_app import BakeryApp
import init_db


class TestBakeryApp(unittest.TestCase):
    """Test cases for BakeryApp"""

    def setUp(self):
        """Set up test database"""
        self.test_db = tempfile.NamedTemporaryFile(delete=False, suffix='.db')
        self.test_db.close()

    def tearDown(self):
        """Clean up test database"""
        os.unlink(self.test_db.name)

    def test_initialization(self):
        """Test that the app wires every layer"""
        app = BakeryApp(self.test_db.name, seed=3, today=date(2024, 6, 15))
        self.assertIsNotNone(app.db_connection)
        self.assertIsNotNone(app.order_service)
        self.assertIsNotNone(app.dashboard_service)
        self.assertEqual(app.data_generator.today, date(2024, 6, 15))
        self.assertFalse(app.data_generator.is_seeded())

    def test_empty_dashboard(self):
        """Test the dashboard of an empty database"""
        app = BakeryApp(self.test_db.name)
        data = app.get_dashboard_data(date(2024, 2, 1))
        self.assertEqual(data.delivery_stats.due_today, 0)
        self.assertEqual(len(data.deliveries_this_month), 29)
        self.assertEqual(data.product_deliveries, {})

    def test_settings_from_environment(self):
        """Test reading settings from environment variables"""
        env = {"BAKERY_DB_PATH": self.test_db.name, "BAKERY_RANDOM_SEED": "7",
               "BAKERY_LOG_LEVEL": "debug"}
        with mock.patch.dict(os.environ, env):
            settings = load_settings()
        self.assertEqual(settings.db_path, self.test_db.name)
        self.assertEqual(settings.random_seed, 7)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_init_database_seeds_once(self):
        """Test that the seeding script only seeds an empty database"""
        with mock.patch.dict(os.environ, {"BAKERY_DB_PATH": self.test_db.name}):
            self.assertTrue(init_db.init_database())
            self.assertFalse(init_db.init_database())

    def test_main_exits_on_failure(self):
        """Test that the seeding script exits with status 1 on failure"""
        with mock.patch.object(init_db, "init_database", side_effect=RuntimeError("disk full")):
            with self.assertRaises(SystemExit) as raised:
                init_db.main()
        self.assertEqual(raised.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
