import pathlib

import pytest

from wedding_seating_plan.models import Couple, Exclusion, Guest, PlanConfiguration, SortingCriteria


DATA_DIR = pathlib.Path(__file__).parent / "data"


def make_guest(gid, first=None, last=None, age=None, role="regular"):
    return Guest(id=gid, first_name=first or gid.upper(), last_name=last, age=age, role=role)


def make_config(tables, seats, honor, **criteria):
    return PlanConfiguration(
        number_of_tables=tables,
        seats_per_table=seats,
        honor_table_seats=honor,
        sorting_criteria=SortingCriteria(**criteria),
    )


def couple(a, b):
    return Couple(guest_a_id=a, guest_b_id=b)


def exclusion(a, b):
    return Exclusion(guest_a_id=a, guest_b_id=b)


@pytest.fixture
def data_dir():
    return DATA_DIR
