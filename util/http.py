"""
util/http.py

Tiny HTTP helpers for JSON GET/POST.
- Callers pass the timeout (from util.config settings); there is no unbounded call
- Single attempt: raises for HTTP status errors and bubbles network errors
"""

import requests


def get_json(url, params=None, headers=None, *, timeout):
    """HTTP GET and decode the JSON body."""
    resp = requests.get(url, params=params, headers=headers, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def post_json(url, payload, params=None, headers=None, *, timeout):
    """HTTP POST a JSON payload and decode the JSON reply."""
    merged = {"Content-Type": "application/json", "Accept": "application/json"}
    if headers:
        merged.update(headers)
    resp = requests.post(url, params=params, json=payload, headers=merged, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
