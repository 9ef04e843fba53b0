# install_dashboard/services/install_demo.py
"""
Deterministic demo installs, standing in for a live installs feed.

The same date always yields the same records: exactly two installs per installer.
"""
import time
from datetime import date, timedelta

from install_dashboard.constants import TECHS, INSTALLERS
from install_dashboard.models import InstallRecord

INSTALLS_PER_INSTALLER = 2

_MODULUS = 2147483647
_MULTIPLIER = 48271

FIRST_NAMES = [
    "Amy", "Ben", "Chloe", "David", "Elena", "Frank", "Grace", "Hector", "Ivy", "Jake", "Kara", "Liam", "Maya",
    "Nolan", "Olivia", "Parker", "Quinn", "Riley", "Sofia", "Ty", "Uma", "Vince", "Wes", "Xena", "Yara", "Zane",
]
LAST_NAMES = [
    "Baker", "Lopez", "Nguyen", "Khan", "Foster", "Smith", "Johnson", "Williams", "Brown", "Jones",
    "Garcia", "Miller", "Davis", "Rodriguez", "Martinez", "Hernandez", "Moore", "Taylor", "Anderson", "Thomas",
]


def seeded_random(seed):
    """Lehmer generator returning floats in (0, 1)."""
    state = seed % _MODULUS
    if state <= 0:
        state += _MODULUS - 1

    def rng():
        nonlocal state
        state = (state * _MULTIPLIER) % _MODULUS
        return state / _MODULUS

    return rng


def str_seed(text):
    """31-multiplier string hash wrapped to a signed 32-bit int, then made non-negative."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def pick(rng, items):
    return items[int(rng() * len(items))]


def random_name(rng):
    return f"{pick(rng, LAST_NAMES)}, {pick(rng, FIRST_NAMES)}"


def dollars(rng, minimum=1200, maximum=5200, step=50):
    steps = (maximum - minimum) // step
    return minimum + int(rng() * (steps + 1)) * step


def add_days_iso(base_iso, delta_days):
    return (date.fromisoformat(base_iso) + timedelta(days=delta_days)).isoformat()


def generate_installs(date_iso):
    rng = seeded_random(str_seed(date_iso))
    records = []

    for installer in INSTALLERS:
        for _ in range(INSTALLS_PER_INSTALLER):
            # sold 3-28 days before install
            sold_offset = -(3 + int(rng() * 26))
            records.append(InstallRecord(
                install_date=date_iso,
                sold_date=add_days_iso(date_iso, sold_offset),
                invoice_amount=dollars(rng),
                customer_name=random_name(rng),
                installer_name=installer,
                sold_by_tech=pick(rng, TECHS),
            ))

    return records


def fetch_installs_demo(date_iso, latency=0.12):
    """Demo records for one install date, after a simulated network delay."""
    records = generate_installs(date_iso)
    if latency:
        time.sleep(latency)
    return records
