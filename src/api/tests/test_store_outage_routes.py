"""Route tests for a MongoDB that is reachable at startup but failing reads."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.jwt_token_issuer import JwtTokenIssuer
from api.config import Settings
from api.dependencies import get_user_repo
from api.main import create_app

TEST_SETTINGS = Settings(jwt_secret='route-test-secret', bcrypt_rounds=4)


class TestStoreReadFailure(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.collection.find_one.side_effect = PyMongoError('boom')
        db = MagicMock()
        db.__getitem__.return_value = self.collection

        self.app = create_app(TEST_SETTINGS)
        self.app.dependency_overrides[get_user_repo] = lambda: MongoUserRepository(db)
        self.client = TestClient(self.app)

        token = JwtTokenIssuer(TEST_SETTINGS.jwt_secret).issue('user-1')
        self.headers = {'Authorization': f'Bearer {token}'}

    def tearDown(self):
        self.app.dependency_overrides.clear()

    def test_signin_is_500_not_invalid_credentials(self):
        response = self.client.post('/api/auth/signin', json={'email': 'a@x.com', 'password': 'secret1'})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Server error during signin'})

    def test_signup_is_500_not_conflict(self):
        response = self.client.post('/api/auth/signup', json={
            'fullName': 'Alice',
            'email': 'a@x.com',
            'password': 'secret1',
            'confirmPassword': 'secret1',
        })

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Server error during signup'})
        self.collection.insert_one.assert_not_called()

    def test_verify_is_500_so_the_session_survives(self):
        response = self.client.get('/api/auth/verify', headers=self.headers)

        self.assertEqual(response.status_code, 500)
        self.assertNotIn('www-authenticate', response.headers)

    def test_get_profile_is_500(self):
        response = self.client.get('/api/profile', headers=self.headers)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Database error'})

    def test_update_profile_is_500_and_writes_nothing(self):
        response = self.client.put('/api/profile', json={'age': 30}, headers=self.headers)

        self.assertEqual(response.status_code, 500)
        self.collection.find_one_and_update.assert_not_called()


if __name__ == '__main__':
    unittest.main()
