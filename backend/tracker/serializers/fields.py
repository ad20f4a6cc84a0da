# -*- coding: utf-8 -*-
"""
Request field helpers shared by the tracker serializers.
"""
from __future__ import annotations
import json

from rest_framework import serializers


class IdListField(serializers.ListField):
    """
    List of integer ids. Accepts a JSON array, a JSON-encoded string
    (multipart forms send ``qaIds='[1,2]'``), a comma-separated string
    (``qaIds='1,2'``) or repeated form keys.
    """
    child = serializers.IntegerField(min_value=1)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = self._decode(data)
        elif isinstance(data, (list, tuple)) and len(data) == 1 and isinstance(data[0], str) \
                and (data[0].strip().startswith("[") or "," in data[0]):
            data = self._decode(data[0])
        return super().to_internal_value(data)

    def _decode(self, raw: str):
        raw = raw.strip()
        if not raw:
            return []
        try:
            decoded = json.loads(raw)
        except ValueError:
            return [part.strip() for part in raw.split(",") if part.strip()]
        return decoded if isinstance(decoded, list) else [decoded]


class BlankableDateTimeField(serializers.DateTimeField):
    """Empty string clears the value, like null."""

    def to_internal_value(self, value):
        if isinstance(value, str) and not value.strip():
            return None
        return super().to_internal_value(value)
