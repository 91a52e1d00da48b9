import unittest

from fakes import FakeFirebaseService
from services.forum_service import ForumService

POST = {'title': 'Export bookings', 'content': 'Please let us export bookings as a CSV file.', 'type': 'feature'}


class ForumServiceTest(unittest.TestCase):
    def setUp(self):
        self.firebase = FakeFirebaseService()
        self.service = ForumService(self.firebase)

    def test_create_post(self):
        result = self.service.create_post(dict(POST), 'owner1', 'admin@example.test')

        self.assertTrue(result.success)
        self.assertEqual(result.message, 'Post created with ID: post1')
        post = self.firebase.forum_posts['post1']
        self.assertEqual((post['ownerUID'], post['ownerEmail'], post['status']),
                         ('owner1', 'admin@example.test', 'open'))

    def test_create_post_requires_owner(self):
        result = self.service.create_post(dict(POST), None)
        self.assertFalse(result.success)
        self.assertEqual(result.message, 'User not authenticated. Cannot create post.')
        self.assertEqual(self.firebase.forum_posts, {})

    def test_create_post_validation(self):
        for field, value in (('title', 'Hey'), ('content', 'Too short'), ('type', 'question')):
            with self.subTest(field=field):
                result = self.service.create_post({**POST, field: value}, 'owner1')
                self.assertFalse(result.success)
        self.assertEqual(self.firebase.forum_posts, {})

    def test_store_failure_is_reported(self):
        self.firebase.fail_forum = True
        result = self.service.create_post(dict(POST), 'owner1')
        self.assertFalse(result.success)
        self.assertEqual(result.message, 'Firestore unavailable')

    def test_my_posts(self):
        self.service.create_post(dict(POST), 'owner1')
        self.service.create_post({**POST, 'type': 'bug'}, 'owner2')
        self.service.create_post({**POST, 'title': 'Second idea'}, 'owner1')

        posts = self.service.get_my_posts('owner1')
        self.assertEqual([p['title'] for p in posts], ['Second idea', 'Export bookings'])

    def test_my_posts_degrade_to_empty(self):
        self.assertEqual(self.service.get_my_posts(None), [])
        self.firebase.fail_forum = True
        self.assertEqual(self.service.get_my_posts('owner1'), [])


if __name__ == '__main__':
    unittest.main()
