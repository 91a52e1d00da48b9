import os
import json
import firebase_admin
from firebase_admin import auth, credentials, firestore
import logging

logger = logging.getLogger(__name__)

SETTINGS_COLLECTION = 'restaurantConfig'
TEMPLATES_SUBCOLLECTION = 'emailTemplates'
BOOKINGS_COLLECTION = 'bookings'
TABLES_SUBCOLLECTION = 'tables'
FORUM_POSTS_COLLECTION = 'forumPosts'

class FirebaseService:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(FirebaseService, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize Firebase Admin SDK"""
        try:
            # Try to get credentials from environment variable first (for hosted deployments)
            creds_json = os.getenv('FIREBASE_CREDENTIALS_JSON')

            if creds_json:
                logger.info("Loading Firebase credentials from environment variable")
                cred = credentials.Certificate(json.loads(creds_json))
            else:
                # Fallback to file (for local development)
                creds_path = os.getenv('FIREBASE_CREDENTIALS_PATH', 'firebase-credentials.json')
                logger.info(f"Loading Firebase credentials from file: {creds_path}")
                cred = credentials.Certificate(creds_path)

            if not firebase_admin._apps:
                firebase_admin.initialize_app(cred)

            self.db = firestore.client()
            logger.info("Firebase initialized successfully")

        except Exception as e:
            # Leave the singleton unset so the next call retries initialization
            FirebaseService._instance = None
            logger.error(f"Failed to initialize Firebase: {str(e)}")
            raise

    # ==================== AUTHENTICATION ====================

    def verify_id_token(self, id_token):
        """Verify a Firebase ID token and return the owner's uid and email"""
        decoded = auth.verify_id_token(id_token)
        return {
            'uid': decoded['uid'],
            'email': decoded.get('email')
        }

    # ==================== RESTAURANT SETTINGS ====================

    def get_settings_by_id(self, owner_uid):
        """Get a tenant's restaurant settings"""
        doc = self.db.collection(SETTINGS_COLLECTION).document(owner_uid).get()
        if doc.exists:
            return doc.to_dict()
        return None

    def save_settings(self, owner_uid, settings_data):
        """Create or update a tenant's restaurant settings"""
        doc_ref = self.db.collection(SETTINGS_COLLECTION).document(owner_uid)
        settings_data['updatedAt'] = firestore.SERVER_TIMESTAMP
        doc_ref.set(settings_data, merge=True)
        return doc_ref.get().to_dict()

    # ==================== EMAIL TEMPLATES ====================

    def _template_ref(self, owner_uid, template_id):
        return (self.db.collection(SETTINGS_COLLECTION)
                .document(owner_uid)
                .collection(TEMPLATES_SUBCOLLECTION)
                .document(template_id))

    def get_template_override(self, owner_uid, template_id):
        """Get a tenant's override of a default email template"""
        doc = self._template_ref(owner_uid, template_id).get()
        if doc.exists:
            return doc.to_dict()
        return None

    def upsert_template_override(self, owner_uid, template_id, template_data):
        """Create or update a tenant's email template override"""
        doc_ref = self._template_ref(owner_uid, template_id)
        doc_ref.set({
            'subject': template_data['subject'],
            'body': template_data['body'],
            'updatedAt': firestore.SERVER_TIMESTAMP
        }, merge=True)

    # ==================== BOOKINGS ====================

    def create_booking(self, booking_data):
        """Create a booking"""
        doc_ref = self.db.collection(BOOKINGS_COLLECTION).document()
        booking_id = doc_ref.id
        if 'status' not in booking_data:
            booking_data['status'] = 'pending'
        booking_data['communicationHistory'] = []
        booking_data['createdAt'] = firestore.SERVER_TIMESTAMP
        doc_ref.set(booking_data)
        booking = doc_ref.get().to_dict()
        booking['id'] = booking_id
        return booking

    def get_booking(self, booking_id):
        """Get booking by ID"""
        doc = self.db.collection(BOOKINGS_COLLECTION).document(booking_id).get()
        if doc.exists:
            booking = doc.to_dict()
            booking['id'] = doc.id
            return booking
        return None

    def get_bookings(self, owner_uid):
        """Get all bookings of a tenant, newest first"""
        bookings = []
        docs = (self.db.collection(BOOKINGS_COLLECTION)
                .where('ownerUID', '==', owner_uid)
                .order_by('createdAt', direction=firestore.Query.DESCENDING)
                .stream())
        for doc in docs:
            booking = doc.to_dict()
            booking['id'] = doc.id
            bookings.append(booking)
        return bookings

    def update_booking(self, booking_id, update_data):
        """Update booking"""
        doc_ref = self.db.collection(BOOKINGS_COLLECTION).document(booking_id)
        update_data['updatedAt'] = firestore.SERVER_TIMESTAMP
        doc_ref.update(update_data)
        booking = doc_ref.get().to_dict()
        booking['id'] = booking_id
        return booking

    def delete_booking(self, booking_id):
        """Delete booking"""
        self.db.collection(BOOKINGS_COLLECTION).document(booking_id).delete()

    def add_communication_note(self, booking_id, note):
        """Append a note to a booking's communication history"""
        doc_ref = self.db.collection(BOOKINGS_COLLECTION).document(booking_id)
        doc_ref.update({
            'communicationHistory': firestore.ArrayUnion([note]),
            'updatedAt': firestore.SERVER_TIMESTAMP
        })

    def count_bookings_between(self, owner_uid, start, end):
        """Count a tenant's bookings created within [start, end]"""
        docs = (self.db.collection(BOOKINGS_COLLECTION)
                .where('ownerUID', '==', owner_uid)
                .where('createdAt', '>=', start)
                .where('createdAt', '<=', end)
                .stream())
        return sum(1 for _ in docs)

    # ==================== TABLES ====================

    def _tables_ref(self, owner_uid):
        return (self.db.collection(SETTINGS_COLLECTION)
                .document(owner_uid)
                .collection(TABLES_SUBCOLLECTION))

    def get_tables(self, owner_uid):
        """Get all tables of a tenant, ordered by name"""
        tables = []
        for doc in self._tables_ref(owner_uid).order_by('name').stream():
            table = doc.to_dict()
            table['id'] = doc.id
            tables.append(table)
        return tables

    def get_table(self, owner_uid, table_id):
        """Get table by ID"""
        doc = self._tables_ref(owner_uid).document(table_id).get()
        if doc.exists:
            table = doc.to_dict()
            table['id'] = doc.id
            return table
        return None

    def create_table(self, owner_uid, table_data):
        """Create a table"""
        doc_ref = self._tables_ref(owner_uid).document()
        table_data['ownerUID'] = owner_uid
        table_data['createdAt'] = firestore.SERVER_TIMESTAMP
        table_data['updatedAt'] = firestore.SERVER_TIMESTAMP
        doc_ref.set(table_data)
        table = doc_ref.get().to_dict()
        table['id'] = doc_ref.id
        return table

    def update_table(self, owner_uid, table_id, update_data):
        """Update table"""
        doc_ref = self._tables_ref(owner_uid).document(table_id)
        update_data['updatedAt'] = firestore.SERVER_TIMESTAMP
        doc_ref.update(update_data)
        table = doc_ref.get().to_dict()
        table['id'] = table_id
        return table

    def delete_table(self, owner_uid, table_id):
        """Delete table"""
        self._tables_ref(owner_uid).document(table_id).delete()

    def update_table_statuses(self, owner_uid, table_ids, status):
        """Set the status of several tables in one batched write"""
        batch = self.db.batch()
        for table_id in table_ids:
            batch.update(self._tables_ref(owner_uid).document(table_id), {
                'status': status,
                'updatedAt': firestore.SERVER_TIMESTAMP
            })
        batch.commit()

    # ==================== FEEDBACK FORUM ====================

    def create_forum_post(self, post_data):
        """Create a feedback forum post"""
        doc_ref = self.db.collection(FORUM_POSTS_COLLECTION).document()
        post_data['createdAt'] = firestore.SERVER_TIMESTAMP
        doc_ref.set(post_data)
        post = doc_ref.get().to_dict()
        post['id'] = doc_ref.id
        return post

    def get_forum_posts(self, owner_uid):
        """Get a tenant's forum posts, newest first"""
        posts = []
        docs = (self.db.collection(FORUM_POSTS_COLLECTION)
                .where('ownerUID', '==', owner_uid)
                .order_by('createdAt', direction=firestore.Query.DESCENDING)
                .stream())
        for doc in docs:
            post = doc.to_dict()
            post['id'] = doc.id
            posts.append(post)
        return posts
