import json

from django.http import HttpResponse
from django.test import SimpleTestCase, RequestFactory, override_settings

from .middleware import JSONExceptionMiddleware


class CorsTestCase(SimpleTestCase):

    @override_settings(CORS_ALLOW_ALL_ORIGINS=False, CORS_ALLOWED_ORIGINS=['https://app.example.com'])
    def test_preflight_for_allowed_origin(self):
        response = self.client.options(
            '/api/courses/',
            HTTP_ORIGIN='https://app.example.com',
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='POST',
            HTTP_ACCESS_CONTROL_REQUEST_HEADERS='authorization, content-type',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Access-Control-Allow-Origin'], 'https://app.example.com')
        self.assertIn('authorization', response['Access-Control-Allow-Headers'])
        self.assertIn('POST', response['Access-Control-Allow-Methods'])

    @override_settings(CORS_ALLOW_ALL_ORIGINS=False, CORS_ALLOWED_ORIGINS=['https://app.example.com'])
    def test_unknown_origin_gets_no_headers(self):
        response = self.client.options(
            '/api/courses/',
            HTTP_ORIGIN='https://evil.example.com',
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='POST',
        )

        self.assertNotIn('Access-Control-Allow-Origin', response)

    @override_settings(CORS_ALLOW_ALL_ORIGINS=True)
    def test_any_origin(self):
        response = self.client.get('/health/', HTTP_ORIGIN='https://anywhere.example.com')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Access-Control-Allow-Origin'], '*')


class JSONExceptionMiddlewareTestCase(SimpleTestCase):

    @override_settings(DEBUG=False)
    def test_exception_becomes_json_500(self):
        middleware = JSONExceptionMiddleware(lambda request: HttpResponse("ok"))
        request = RequestFactory().get('/api/courses/')

        response = middleware.process_exception(request, RuntimeError('boom'))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(json.loads(response.content), {'error': 'Internal Server Error', 'path': '/api/courses/'})
