"""Presentation utilities for gimmickdump reports."""

from . import formatter
from . import writer
from . import summary

__all__ = ['formatter', 'writer', 'summary']
