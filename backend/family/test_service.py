"""Tests for the family request lifecycle and network stores."""

import threading

import pytest

from backend.errors import Conflict, InvalidInput, InvalidState, NotFound
from backend.family.models import FamilyNetworkEntry, RequestStatus, Target, TargetKind

JOHN = "john.doe@example.com"
JANE = "jane.smith@example.com"
MIKE = "mike.johnson@example.com"


class TestSubmit:
    def test_creates_one_pending_request(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")

        assert request.status is RequestStatus.pending
        assert request.responded_at is None
        assert request.target == Target(TargetKind.email, JANE)
        assert len(family_service.requests) == 1
        assert family_service.requests.get(request.id) is request

    def test_ids_are_unique(self, family_service):
        a = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        b = family_service.submit(from_email=JOHN, to_email=MIKE, relationship="Sibling")
        assert a.id != b.id

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"from_email": None, "to_email": JANE, "relationship": "Spouse"},
            {"from_email": JOHN, "relationship": "Spouse"},
            {"from_email": JOHN, "to_email": "", "to_name": "", "relationship": "Spouse"},
            {"from_email": JOHN, "to_email": JANE, "relationship": None},
        ],
    )
    def test_missing_fields(self, family_service, kwargs):
        with pytest.raises(InvalidInput, match="Missing required fields"):
            family_service.submit(**kwargs)
        assert len(family_service.requests) == 0

    def test_name_only_target(self, family_service):
        request = family_service.submit(from_email=JOHN, to_name="Grandma Rose", relationship="Grandchild")
        assert request.to_email is None
        assert request.target == Target(TargetKind.name, "Grandma Rose")

    def test_duplicate_pending_is_a_conflict(self, family_service):
        family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        with pytest.raises(Conflict, match="Request already pending"):
            family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        assert len(family_service.requests) == 1

    def test_different_relationship_is_not_a_duplicate(self, family_service):
        family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        family_service.submit(from_email=JOHN, to_email=JANE, relationship="Friend")
        assert len(family_service.requests) == 2

    def test_different_target_is_not_a_duplicate(self, family_service):
        family_service.submit(from_email=JOHN, to_email=JANE, relationship="Sibling")
        family_service.submit(from_email=JOHN, to_email=MIKE, relationship="Sibling")
        assert len(family_service.requests) == 2

    def test_email_and_name_targets_are_distinct(self, family_service):
        family_service.submit(
            from_email=JOHN, to_email=JANE, to_name="Jane", relationship="Sibling"
        )
        second = family_service.submit(from_email=JOHN, to_name="Jane", relationship="Sibling")

        assert second.target == Target(TargetKind.name, "Jane")
        assert len(family_service.requests) == 2

    def test_resubmit_after_decline(self, family_service):
        first = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        family_service.reject(first.id)
        second = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        assert second.id != first.id

    def test_already_in_family(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        family_service.accept(request.id)

        with pytest.raises(Conflict, match="Already in family network"):
            family_service.submit(from_email=JOHN, to_email=JANE, relationship="Friend")
        assert len(family_service.requests) == 1

    def test_already_in_family_matches_name_against_stored_email(self, family_service):
        # Name-only members are stored under their name
        request = family_service.submit(from_email=JOHN, to_name="Grandma Rose", relationship="Grandchild")
        family_service.accept(request.id)

        with pytest.raises(Conflict):
            family_service.submit(from_email=JOHN, to_name="Grandma Rose", relationship="Friend")

    def test_concurrent_duplicates_create_one_request(self, family_service):
        results = []

        def submit():
            try:
                family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
                results.append("ok")
            except Conflict:
                results.append("conflict")

        threads = [threading.Thread(target=submit) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ok") == 1
        assert len(family_service.requests) == 1


class TestAcceptReject:
    def test_accept_links_both_networks(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Parent")
        accepted = family_service.accept(request.id)

        assert accepted.status is RequestStatus.accepted
        assert accepted.responded_at is not None

        john_network = family_service.network_of(JOHN)
        assert len(john_network) == 1
        assert john_network[0].email == JANE
        assert john_network[0].name == "Jane Smith"
        assert john_network[0].relationship == "Parent"
        assert john_network[0].status is RequestStatus.accepted

        jane_network = family_service.network_of(JANE)
        assert len(jane_network) == 1
        assert jane_network[0].email == JOHN
        assert jane_network[0].name == "John Doe"
        assert jane_network[0].relationship == "Child"

    def test_accept_unknown_relationship_is_related(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=MIKE, relationship="Neighbour")
        family_service.accept(request.id)
        assert family_service.network_of(MIKE)[0].relationship == "Related"

    def test_accept_unknown_users_falls_back_to_identifiers(self, family_service):
        request = family_service.submit(
            from_email="ann@else.org", to_email="bob@else.org", relationship="Sibling"
        )
        family_service.accept(request.id)
        assert family_service.network_of("ann@else.org")[0].name == "bob@else.org"
        assert family_service.network_of("bob@else.org")[0].name == "ann@else.org"

    def test_accept_prefers_directory_name_over_to_name(self, family_service):
        request = family_service.submit(
            from_email=JOHN, to_email=JANE, to_name="Janie", relationship="Sibling"
        )
        family_service.accept(request.id)
        assert family_service.network_of(JOHN)[0].name == "Jane Smith"

    def test_accept_name_only_target(self, family_service):
        request = family_service.submit(from_email=JOHN, to_name="Grandma Rose", relationship="Grandchild")
        family_service.accept(request.id)

        entry = family_service.network_of(JOHN)[0]
        assert entry.email == "Grandma Rose"
        assert entry.name == "Grandma Rose"
        assert family_service.network_of("Grandma Rose") == []

    def test_second_transition_is_invalid(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        family_service.accept(request.id)

        with pytest.raises(InvalidState, match="Request already processed"):
            family_service.accept(request.id)
        with pytest.raises(InvalidState):
            family_service.reject(request.id)

        assert request.status is RequestStatus.accepted
        assert len(family_service.network_of(JOHN)) == 1

    def test_reject_leaves_networks_untouched(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        declined = family_service.reject(request.id)

        assert declined.status is RequestStatus.declined
        assert declined.responded_at is not None
        assert family_service.network_of(JOHN) == []
        assert family_service.network_of(JANE) == []
        with pytest.raises(InvalidState):
            family_service.accept(request.id)

    def test_concurrent_accept_and_reject_settle_once(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        results = []

        def respond(action):
            try:
                getattr(family_service, action)(request.id)
                results.append(action)
            except InvalidState:
                results.append("invalid")

        threads = [
            threading.Thread(target=respond, args=("accept" if i % 2 else "reject",))
            for i in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("invalid") == 9
        if request.status is RequestStatus.accepted:
            assert "accept" in results
            assert len(family_service.network_of(JOHN)) == 1
            assert len(family_service.network_of(JANE)) == 1
        else:
            assert request.status is RequestStatus.declined
            assert "reject" in results
            assert family_service.network_of(JOHN) == []
            assert family_service.network_of(JANE) == []

    @pytest.mark.parametrize("action", ["accept", "reject"])
    def test_unknown_id(self, family_service, action):
        with pytest.raises(NotFound, match="Request not found"):
            getattr(family_service, action)("no-such-id")


class TestQueries:
    def test_list_for(self, family_service):
        sent_pending = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        sent_declined = family_service.submit(from_email=JOHN, to_email=MIKE, relationship="Friend")
        family_service.reject(sent_declined.id)
        received = family_service.submit(from_email=MIKE, to_email=JOHN, relationship="Cousin")
        by_name = family_service.submit(from_email=JANE, to_name=JOHN, relationship="Sibling")
        answered = family_service.submit(from_email=JANE, to_email=JOHN, relationship="Friend")
        family_service.accept(answered.id)

        lists = family_service.list_for(JOHN)
        assert [r.id for r in lists.sent] == [sent_pending.id, sent_declined.id]
        assert [r.id for r in lists.received] == [received.id, by_name.id]

    def test_network_of_unknown_email_is_empty(self, family_service):
        assert family_service.network_of("nobody@example.com") == []

    def test_network_of_returns_a_copy(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Spouse")
        family_service.accept(request.id)
        family_service.network_of(JOHN).clear()
        assert len(family_service.network_of(JOHN)) == 1

    @pytest.mark.parametrize("method", ["list_for", "network_of"])
    def test_email_required(self, family_service, method):
        with pytest.raises(InvalidInput, match="Email query parameter is required"):
            getattr(family_service, method)("")

    def test_mutual_network(self, family_service):
        request = family_service.submit(from_email=JOHN, to_email=JANE, relationship="Parent")
        family_service.accept(request.id)

        mutual = family_service.mutual_network(JOHN, JANE)
        assert mutual.email1 == JOHN
        assert [e.email for e in mutual.family1] == [JANE]
        assert [e.email for e in mutual.family2] == [JOHN]
        assert mutual.relationship.relationship == "Parent"

        reverse = family_service.mutual_network(JANE, JOHN)
        assert reverse.relationship.relationship == "Child"

    def test_mutual_network_falls_back_to_second_network(self, family_service):
        # Entry only exists in the second user's network
        family_service.networks.add(
            JANE, FamilyNetworkEntry(email=JOHN, name="John Doe", relationship="Friend")
        )
        mutual = family_service.mutual_network(JOHN, JANE)
        assert mutual.family1 == []
        assert mutual.relationship.email == JOHN

    def test_mutual_network_without_link(self, family_service):
        mutual = family_service.mutual_network(JOHN, MIKE)
        assert mutual.family1 == [] and mutual.family2 == []
        assert mutual.relationship is None

    @pytest.mark.parametrize("email1, email2", [(JOHN, None), ("", JANE)])
    def test_mutual_network_requires_both(self, family_service, email1, email2):
        with pytest.raises(InvalidInput, match="Both email1 and email2 are required"):
            family_service.mutual_network(email1, email2)
