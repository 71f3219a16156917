"""Adapters for the legacy shapes the task file has been stored in.

Two historical layouts show up besides a plain list:

* grouped by lead: ``{"Ann": [{...}, ...], "Bob": [...]}``
* array-ish object: ``{"0": {...}, "1": {...}, "id": "..."}``
"""
import re

_NUMERIC_KEY = re.compile(r'^\d+$')


def array_from_lead_keyed(obj):
    out = []
    for lead, items in obj.items():
        if isinstance(items, list):
            out.extend(dict(t, lead=lead) if isinstance(t, dict) else t for t in items)
    return out


def array_from_arrayish(obj):
    keys = sorted((k for k in obj if _NUMERIC_KEY.match(str(k))), key=int)
    return [obj[k] for k in keys]


def coerce_to_array(data):
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        flat = array_from_lead_keyed(data)
        if flat:
            return flat
        arrish = array_from_arrayish(data)
        if arrish:
            return arrish
    return []
