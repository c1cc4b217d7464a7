"""Declarative base shared by all AIQA models."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
