from unittest import mock

import requests
from django.test import SimpleTestCase, override_settings

from bunny_cdn import BunnyCDNService, BunnyCDNError, review_video_file_name


class BunnyCDNServiceTestCase(SimpleTestCase):
    """
    Test cases for the Bunny CDN storage client
    """

    def setUp(self):
        self.session = mock.Mock(spec=requests.Session)
        self.service = BunnyCDNService(
            api_key='secret-key',
            storage_zone='course-videos',
            storage_host='storage.bunnycdn.com',
            timeout=30,
            session=self.session,
        )

    def test_upload_returns_public_url(self):
        self.session.put.return_value = mock.Mock(status_code=201, text='')

        url = self.service.upload(b'video-bytes', 'review_7_1700000000000.mp4')

        self.assertEqual(url, 'https://course-videos.b-cdn.net/review_7_1700000000000.mp4')
        self.session.put.assert_called_once_with(
            'https://storage.bunnycdn.com/course-videos/review_7_1700000000000.mp4',
            data=b'video-bytes',
            headers={'AccessKey': 'secret-key', 'Content-Type': 'application/octet-stream'},
            timeout=30,
        )

    def test_upload_only_accepts_201(self):
        self.session.put.return_value = mock.Mock(status_code=200, text='OK')

        with self.assertRaises(BunnyCDNError):
            self.service.upload(b'video-bytes', 'review.mp4')

    def test_upload_transport_error(self):
        self.session.put.side_effect = requests.ConnectionError('connection refused')

        with self.assertRaises(BunnyCDNError):
            self.service.upload(b'video-bytes', 'review.mp4')

    def test_upload_without_credentials(self):
        service = BunnyCDNService(api_key='', storage_zone='', session=self.session)

        self.assertFalse(service.is_available())
        with self.assertRaises(BunnyCDNError):
            service.upload(b'video-bytes', 'review.mp4')
        self.session.put.assert_not_called()

    def test_delete_treats_missing_file_as_deleted(self):
        self.session.delete.return_value = mock.Mock(status_code=404)
        self.service.delete('review.mp4')

        self.session.delete.return_value = mock.Mock(status_code=500)
        with self.assertRaises(BunnyCDNError):
            self.service.delete('review.mp4')

    def test_file_name_from_url(self):
        self.assertEqual(
            self.service.file_name_from_url('https://course-videos.b-cdn.net/review_7_1.mp4'),
            'review_7_1.mp4'
        )
        self.assertIsNone(self.service.file_name_from_url('https://elsewhere.example.com/review_7_1.mp4'))
        self.assertIsNone(self.service.file_name_from_url(''))

    @override_settings(
        BUNNY_CDN_API_KEY='from-settings',
        BUNNY_CDN_STORAGE_ZONE='settings-zone',
        BUNNY_CDN_STORAGE_HOST='ny.storage.bunnycdn.com',
        BUNNY_CDN_TIMEOUT_SECONDS=60,
    )
    def test_defaults_come_from_settings(self):
        service = BunnyCDNService()

        self.assertEqual(service.storage_url('a.mp4'), 'https://ny.storage.bunnycdn.com/settings-zone/a.mp4')
        self.assertEqual(service.timeout, 60)
        self.assertTrue(service.is_available())

    def test_review_video_file_name(self):
        self.assertEqual(review_video_file_name(12, 1700000000000), 'review_12_1700000000000.mp4')
