import logging
import os
import tempfile
import unittest

from treecutmesh.logging_config import remove_logging, setup_logging


class TestLoggingConfig(unittest.TestCase):
    def tearDown(self) -> None:
        for namespace in ("treecutmesh", "treecutmesh.pre"):
            remove_logging(namespace)
            logging.getLogger(namespace).setLevel(logging.NOTSET)

    def test_repeated_setup_installs_one_console_handler(self):
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.DEBUG)

        self.assertIs(logger, logging.getLogger("treecutmesh"))
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_caller_handlers_survive_repeated_setup(self):
        logger = logging.getLogger("treecutmesh")
        own = logging.NullHandler()
        logger.addHandler(own)
        try:
            setup_logging(logging.INFO)
            setup_logging(logging.WARNING)

            self.assertIn(own, logger.handlers)
            self.assertEqual(len(logger.handlers), 2)
            remove_logging()
            self.assertEqual(logger.handlers, [own])
        finally:
            logger.removeHandler(own)

    def test_namespace_selects_logger(self):
        logger = setup_logging(logging.DEBUG, namespace="treecutmesh.pre")

        self.assertEqual(logger.name, "treecutmesh.pre")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logging.getLogger("treecutmesh").handlers, [])

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "mesh.log")
            logger = setup_logging(logging.DEBUG, log_file=path)
            logging.getLogger("treecutmesh.pre.mesher").info("written to file")

            self.assertEqual(len(logger.handlers), 2)
            remove_logging()

            with open(path, encoding="utf-8") as log:
                content = log.read()
        self.assertIn("Logging initialized for 'treecutmesh'", content)
        self.assertIn("treecutmesh.pre.mesher - INFO - written to file", content)


if __name__ == "__main__":
    unittest.main()
