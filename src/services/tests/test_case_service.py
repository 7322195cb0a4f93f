"""Unit tests for case_service using in-memory repositories."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from adapter.fake.case_repository import FakeCaseRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.case import CaseStatus
from domain.model.errors import NotFoundError, PersistenceError, ValidationError
from services import case_service


class CaseServiceTestBase(unittest.TestCase):

    def setUp(self):
        self.repo = FakeCaseRepository()
        self.users = FakeUserRepository()
        self.ana = self.users.create(email='ana@x.com', password_hash='h', name='Ana')
        self.bia = self.users.create(email='bia@x.com', password_hash='h', name='Bia')


class TestCreate(CaseServiceTestBase):

    def test_create_records_requester_and_defaults(self):
        view = case_service.create(self.repo, self.users, 'Case1', 'd', requester_id=self.ana.id)

        self.assertEqual(view.case.created_by, self.ana.id)
        self.assertEqual(view.case.status, CaseStatus.IN_PROGRESS)
        self.assertEqual(view.creator_name, 'Ana')
        self.assertIsNotNone(self.repo.get_by_id(view.case.id))

    def test_create_store_failure_propagates(self):
        repo = MagicMock()
        repo.save.side_effect = PersistenceError("Failed to save case")

        with self.assertRaises(PersistenceError):
            case_service.create(repo, self.users, 't', 'd', requester_id=self.ana.id)


class TestListCases(CaseServiceTestBase):

    def test_list_resolves_creator_names(self):
        case_service.create(self.repo, self.users, 'A', 'd', requester_id=self.ana.id)
        case_service.create(self.repo, self.users, 'B', 'd', requester_id=self.bia.id)

        views = case_service.list_cases(self.repo, self.users)

        self.assertEqual([(v.case.title, v.creator_name) for v in views], [('A', 'Ana'), ('B', 'Bia')])

    def test_list_is_not_scoped_to_requester(self):
        case_service.create(self.repo, self.users, 'A', 'd', requester_id=self.ana.id)

        self.assertEqual(len(case_service.list_cases(self.repo, self.users)), 1)

    def test_list_with_missing_creator(self):
        case_service.create(self.repo, self.users, 'A', 'd', requester_id='deleted-user')

        views = case_service.list_cases(self.repo, self.users)

        self.assertIsNone(views[0].creator_name)
        self.assertEqual(views[0].case.created_by, 'deleted-user')

    def test_list_looks_up_users_once(self):
        users = MagicMock(wraps=self.users)
        for title in ('A', 'B', 'C'):
            case_service.create(self.repo, self.users, title, 'd', requester_id=self.ana.id)

        case_service.list_cases(self.repo, users)

        users.get_by_ids.assert_called_once_with([self.ana.id])


class TestUpdate(CaseServiceTestBase):

    def setUp(self):
        super().setUp()
        self.case = case_service.create(self.repo, self.users, 'Case1', 'd', requester_id=self.ana.id).case

    def test_update_overwrites_given_fields(self):
        view = case_service.update(self.repo, self.users, self.case.id, {
            'title': 'Renamed',
            'status': 'Finalized',
        })

        self.assertEqual(view.case.title, 'Renamed')
        self.assertEqual(view.case.status, CaseStatus.FINALIZED)
        self.assertEqual(view.case.description, 'd')

    def test_update_can_reassign_creator_and_timestamp(self):
        view = case_service.update(self.repo, self.users, self.case.id, {
            'createdBy': self.bia.id,
            'createdAt': '2020-01-01T00:00:00Z',
        })

        self.assertEqual(view.case.created_by, self.bia.id)
        self.assertEqual(view.creator_name, 'Bia')
        self.assertEqual(view.case.created_at, datetime(2020, 1, 1, tzinfo=timezone.utc))

    def test_status_may_move_backwards(self):
        case_service.update(self.repo, self.users, self.case.id, {'status': 'Archived'})
        view = case_service.update(self.repo, self.users, self.case.id, {'status': 'InProgress'})

        self.assertEqual(view.case.status, CaseStatus.IN_PROGRESS)

    def test_unknown_keys_are_ignored(self):
        view = case_service.update(self.repo, self.users, self.case.id, {'colour': 'red'})

        self.assertEqual(view.case.title, 'Case1')

    def test_invalid_status_rejected(self):
        with self.assertRaises(ValidationError):
            case_service.update(self.repo, self.users, self.case.id, {'status': 'Closed'})

        self.assertEqual(self.repo.get_by_id(self.case.id).status, CaseStatus.IN_PROGRESS)

    def test_invalid_created_at_rejected(self):
        with self.assertRaises(ValidationError):
            case_service.update(self.repo, self.users, self.case.id, {'createdAt': 'yesterday'})

    def test_created_at_without_offset_is_utc_and_still_sortable(self):
        case_service.create(self.repo, self.users, 'Later', 'd', requester_id=self.bia.id)

        view = case_service.update(self.repo, self.users, self.case.id, {'createdAt': '2026-01-01'})

        self.assertEqual(view.case.created_at, datetime(2026, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(len(case_service.list_cases(self.repo, self.users)), 2)

    def test_update_missing_case_fails_without_changes(self):
        before = self.repo.find_all()

        with self.assertRaises(NotFoundError):
            case_service.update(self.repo, self.users, 'nonexistent', {'title': 'x'})

        self.assertEqual(self.repo.find_all(), before)

    def test_changing_id_is_refused_by_store(self):
        with self.assertRaises(PersistenceError):
            case_service.update(self.repo, self.users, self.case.id, {'id': 'other'})


class TestNormalizePatch(unittest.TestCase):

    def test_maps_client_names_to_attributes(self):
        changes = case_service.normalize_patch({'createdBy': 'u', 'title': 'T', 'status': 'Archived'})

        self.assertEqual(changes, {'created_by': 'u', 'title': 'T', 'status': CaseStatus.ARCHIVED})

    def test_numbers_become_text(self):
        self.assertEqual(case_service.normalize_patch({'title': 42}), {'title': '42'})

    def test_objects_are_not_text(self):
        with self.assertRaises(ValidationError):
            case_service.normalize_patch({'description': {'nested': True}})


class TestDelete(CaseServiceTestBase):

    def test_delete_removes_case(self):
        case = case_service.create(self.repo, self.users, 'Case1', 'd', requester_id=self.ana.id).case

        case_service.delete(self.repo, case.id)

        self.assertIsNone(self.repo.get_by_id(case.id))

    def test_delete_missing_case_is_silent(self):
        case_service.create(self.repo, self.users, 'Case1', 'd', requester_id=self.ana.id)

        case_service.delete(self.repo, 'nonexistent')

        self.assertEqual(len(self.repo.find_all()), 1)

    def test_delete_store_failure_propagates(self):
        repo = MagicMock()
        repo.delete_by_id.side_effect = PersistenceError("Failed to delete case")

        with self.assertRaises(PersistenceError):
            case_service.delete(repo, 'case-1')


if __name__ == '__main__':
    unittest.main()
