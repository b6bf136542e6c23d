from sqlprep.utils import logging

__all__ = ("logging",)
