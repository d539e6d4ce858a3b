"""Tests for the error → HTTP status mapping."""

import unittest

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from api.errors import register_exception_handlers, status_for
from domain.model.errors import (
    AuthError,
    ConflictError,
    DomainError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)


class TestStatusFor(unittest.TestCase):

    def test_mapping(self):
        cases = [
            (ValidationError('x'), 400),
            (ConflictError('x'), 400),
            (InvalidCredentialsError('x'), 400),
            (AuthError('x'), 401),
            (NotFoundError('x'), 404),
            (InternalError('x'), 500),
            (DomainError('x'), 500),
        ]
        for exc, expected in cases:
            with self.subTest(error=type(exc).__name__):
                self.assertEqual(status_for(exc), expected)


class TestErrorResponses(unittest.TestCase):
    """Errors raised inside a route come back as {"message": ...}."""

    def setUp(self):
        app = FastAPI()
        register_exception_handlers(app)
        router = APIRouter(prefix="/api/boom")

        @router.get('/not-found')
        async def not_found():
            raise NotFoundError('User not found')

        @router.get('/bare-domain')
        async def bare_domain():
            raise DomainError('mongo said E11000 at shard 3')

        @router.get('/unexpected')
        async def unexpected():
            raise RuntimeError('stack details')

        app.include_router(router)
        self.client = TestClient(app, raise_server_exceptions=False)

    def test_not_found(self):
        response = self.client.get('/api/boom/not-found')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'message': 'User not found'})

    def test_internal_details_are_hidden(self):
        response = self.client.get('/api/boom/bare-domain')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Internal server error'})

    def test_unexpected_exception_is_generic_500(self):
        response = self.client.get('/api/boom/unexpected')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'message': 'Internal server error'})
        self.assertNotIn('stack details', response.text)


if __name__ == '__main__':
    unittest.main()
