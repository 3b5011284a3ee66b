"""
Relationship Table - labels a family connection can carry and their inverses.

A request states the relationship from the requester's side ("my Parent");
the other party's network records the inverse ("my Child").
"""

from enum import Enum
from typing import Optional


UNKNOWN_INVERSE = "Related"


class Relationship(str, Enum):
    spouse = "Spouse"
    parent = "Parent"
    child = "Child"
    sibling = "Sibling"
    grandparent = "Grandparent"
    grandchild = "Grandchild"
    uncle = "Uncle"
    aunt = "Aunt"
    uncle_aunt = "Uncle/Aunt"
    niece_nephew = "Niece/Nephew"
    cousin = "Cousin"
    friend = "Friend"
    caregiver = "Caregiver"
    patient = "Patient"

    @classmethod
    def parse(cls, label: Optional[str]) -> Optional["Relationship"]:
        try:
            return cls(label)
        except ValueError:
            return None


INVERSE_RELATIONSHIPS: dict[Relationship, Relationship] = {
    Relationship.spouse: Relationship.spouse,
    Relationship.parent: Relationship.child,
    Relationship.child: Relationship.parent,
    Relationship.sibling: Relationship.sibling,
    Relationship.grandparent: Relationship.grandchild,
    Relationship.grandchild: Relationship.grandparent,
    # Gender of the niece/nephew is unknown, so both collapse to one label
    Relationship.uncle: Relationship.niece_nephew,
    Relationship.aunt: Relationship.niece_nephew,
    Relationship.uncle_aunt: Relationship.niece_nephew,
    Relationship.niece_nephew: Relationship.uncle_aunt,
    Relationship.cousin: Relationship.cousin,
    Relationship.friend: Relationship.friend,
    Relationship.caregiver: Relationship.patient,
    Relationship.patient: Relationship.caregiver,
}


def inverse_relationship(label: Optional[str]) -> str:
    """Return the label the other party sees; ``Related`` for unknown labels."""
    relationship = Relationship.parse(label)
    if relationship is None:
        return UNKNOWN_INVERSE
    return INVERSE_RELATIONSHIPS[relationship].value
