"""Unit tests for profile_service."""

import unittest
from datetime import date, datetime
from unittest.mock import MagicMock

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import InternalError, NotFoundError, ValidationError
from services.profile_service import get_profile, update_profile


class ProfileServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = self.repo.create(email='a@x.com', password_hash='stored-hash', full_name='Alice')


class TestGetProfile(ProfileServiceTestCase):

    def test_returns_user(self):
        self.assertEqual(get_profile(self.repo, self.user.id).email, 'a@x.com')

    def test_missing_user(self):
        with self.assertRaises(NotFoundError):
            get_profile(self.repo, 'nonexistent')

    def test_store_read_failure_is_internal_error(self):
        repo = MagicMock()
        repo.get_by_id.side_effect = InternalError('Database error')

        with self.assertRaises(InternalError) as ctx:
            get_profile(repo, self.user.id)

        self.assertEqual(ctx.exception.message, 'Error fetching profile')


class TestUpdateProfile(ProfileServiceTestCase):

    def test_round_trip_merges_over_prior_state(self):
        update_profile(self.repo, self.user.id, {'age': 30, 'mother_name': 'Carol'})
        update_profile(self.repo, self.user.id, {
            'full_name': 'Alice Smith',
            'date_of_birth': date(1996, 5, 1),
            'gender': 'female',
            'hobbies': ['reading', 'music'],
        })

        profile = get_profile(self.repo, self.user.id)

        self.assertEqual(profile.full_name, 'Alice Smith')
        self.assertEqual(profile.age, 30)
        self.assertEqual(profile.mother_name, 'Carol')
        self.assertEqual(profile.date_of_birth, date(1996, 5, 1))
        self.assertEqual(profile.gender, 'female')
        self.assertEqual(profile.hobbies, ['reading', 'music'])
        self.assertEqual(profile.email, 'a@x.com')

    def test_password_hash_cannot_be_set(self):
        update_profile(self.repo, self.user.id, {'password_hash': 'evil', 'password': 'evil', 'age': 5})

        self.assertEqual(self.repo.store[self.user.id].password_hash, 'stored-hash')

    def test_email_cannot_be_changed(self):
        update_profile(self.repo, self.user.id, {'email': 'other@x.com'})

        self.assertEqual(get_profile(self.repo, self.user.id).email, 'a@x.com')

    def test_none_clears_optional_field(self):
        update_profile(self.repo, self.user.id, {'age': 30, 'hobbies': ['music']})
        profile = update_profile(self.repo, self.user.id, {'age': None, 'hobbies': None})

        self.assertIsNone(profile.age)
        self.assertEqual(profile.hobbies, [])

    def test_hobbies_are_deduplicated(self):
        profile = update_profile(self.repo, self.user.id, {'hobbies': ['music', 'reading', 'music']})

        self.assertEqual(profile.hobbies, ['music', 'reading'])

    def test_hobbies_are_stored_as_submitted(self):
        profile = update_profile(self.repo, self.user.id, {'hobbies': [' reading', 'Music']})

        self.assertEqual(profile.hobbies, [' reading', 'Music'])
        self.assertEqual(get_profile(self.repo, self.user.id).hobbies, [' reading', 'Music'])

    def test_blank_full_name_rejected(self):
        for value in ('', '   ', None):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    update_profile(self.repo, self.user.id, {'full_name': value})

    def test_type_incompatible_values_rejected(self):
        cases = [
            {'age': 'abc'},
            {'age': -1},
            {'age': 151},
            {'age': True},
            {'date_of_birth': '1996-05-01'},
            {'date_of_birth': datetime(1996, 5, 1)},
            {'gender': 'unknown'},
            {'hobbies': 'reading'},
            {'hobbies': 5},
            {'hobbies': ['ok', 3]},
            {'description': 42},
        ]
        for fields in cases:
            with self.subTest(fields=fields):
                with self.assertRaises(ValidationError):
                    update_profile(self.repo, self.user.id, fields)

    def test_invalid_update_writes_nothing(self):
        with self.assertRaises(ValidationError):
            update_profile(self.repo, self.user.id, {'mother_name': 'Carol', 'age': 'abc'})

        self.assertIsNone(get_profile(self.repo, self.user.id).mother_name)

    def test_empty_update_returns_current_profile(self):
        profile = update_profile(self.repo, self.user.id, {})

        self.assertEqual(profile.id, self.user.id)

    def test_missing_user(self):
        with self.assertRaises(NotFoundError):
            update_profile(self.repo, 'nonexistent', {'age': 1})

    def test_store_failure_is_internal_error(self):
        repo = MagicMock()
        repo.get_by_id.return_value = self.user
        repo.update_profile.return_value = None

        with self.assertRaises(InternalError):
            update_profile(repo, self.user.id, {'age': 1})

    def test_store_read_failure_writes_nothing(self):
        repo = MagicMock()
        repo.get_by_id.side_effect = InternalError('Database error')

        with self.assertRaises(InternalError) as ctx:
            update_profile(repo, self.user.id, {'age': 1})

        self.assertEqual(ctx.exception.message, 'Error updating profile')
        repo.update_profile.assert_not_called()


if __name__ == '__main__':
    unittest.main()
