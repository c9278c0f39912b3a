"""
Demo: Build a few struct types and exercise their operations.
"""

import logging

from structkit import StructFactory
from structkit.definitions import definitions_from_yaml, definitions_to_yaml


class PointMethods:
    def norm1(self):
        return abs(self.x) + abs(self.y)


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    factory = StructFactory()
    Point = factory.create("Point", "x", "y", methods=PointMethods)
    definitions_from_yaml("structs:\n  person: [name, age, address]\n", factory)
    Person = factory.namespace.Person

    p = Point(3, -4)
    ann = Person("Ann", 30, {"city": "Oslo", "lines": ["1 Main St"]})

    print()
    print("=" * 70)
    print("STRUCT DEMO")
    print("=" * 70)
    print(f"  Registered:   {factory.namespace.names()}")
    print(f"  Point:        {p!r}  norm1={p.norm1()}")
    print(f"  Person:       {ann!r}")
    print(f"  members:      {ann.members()}")
    print(f"  values_at:    {ann.values_at(0, 1, 5)}")
    print(f"  dig city:     {ann.dig('address', 'city')}")
    print(f"  dig line 0:   {ann.dig('address', 'lines', 0)}")
    print(f"  select str:   {ann.select(lambda v: isinstance(v, str))}")
    print(f"  equal:        {Point(3, -4) == p}")
    print()

    ann["email"] = "ann@example.com"
    print(f"  widened:      {ann.members()} (shape {Person.shape()})")
    print()
    print(definitions_to_yaml([Point, Person]))


if __name__ == "__main__":
    main()
