"""Shared data model primitives."""

from tg_digest.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
