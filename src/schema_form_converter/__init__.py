"""Bidirectional converter between schemas and editable form models."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
