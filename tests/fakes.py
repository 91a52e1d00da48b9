"""In-memory stand-ins for the Firebase and email collaborators"""
from datetime import datetime, timezone

from services.models import DispatchResult


class FakeFirebaseService:
    def __init__(self, settings=None, overrides=None, tokens=None):
        self.settings = settings or {}
        self.overrides = overrides or {}
        self.tokens = tokens or {}
        self.bookings = {}
        self.tables = {}
        self.forum_posts = {}
        self.fail_tables = False
        self.fail_forum = False
        self.weekly_count = 0
        self.fail_settings = False
        self.fail_overrides = False
        self.settings_lookups = 0

    def verify_id_token(self, id_token):
        if id_token not in self.tokens:
            raise ValueError('Invalid ID token')
        return self.tokens[id_token]

    def get_settings_by_id(self, owner_uid):
        self.settings_lookups += 1
        if self.fail_settings:
            raise RuntimeError('Firestore unavailable')
        return self.settings.get(owner_uid)

    def save_settings(self, owner_uid, settings_data):
        self.settings.setdefault(owner_uid, {}).update(settings_data)
        return dict(self.settings[owner_uid])

    def get_template_override(self, owner_uid, template_id):
        if self.fail_overrides:
            raise RuntimeError('Firestore unavailable')
        return self.overrides.get((owner_uid, template_id))

    def upsert_template_override(self, owner_uid, template_id, template_data):
        override = self.overrides.setdefault((owner_uid, template_id), {})
        override.update(template_data)
        override['updatedAt'] = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def create_booking(self, booking_data):
        booking_id = f"booking{len(self.bookings) + 1}"
        booking = {**booking_data, 'communicationHistory': [], 'id': booking_id}
        self.bookings[booking_id] = booking
        return dict(booking)

    def get_booking(self, booking_id):
        booking = self.bookings.get(booking_id)
        return dict(booking) if booking else None

    def get_bookings(self, owner_uid):
        return [dict(b) for b in self.bookings.values() if b.get('ownerUID') == owner_uid]

    def update_booking(self, booking_id, update_data):
        self.bookings[booking_id].update(update_data)
        return dict(self.bookings[booking_id])

    def delete_booking(self, booking_id):
        del self.bookings[booking_id]

    def add_communication_note(self, booking_id, note):
        self.bookings[booking_id]['communicationHistory'].append(note)

    def count_bookings_between(self, owner_uid, start, end):
        return self.weekly_count

    def get_tables(self, owner_uid):
        if self.fail_tables:
            raise RuntimeError('Firestore unavailable')
        tables = [dict(t) for t in self.tables.values() if t.get('ownerUID') == owner_uid]
        return sorted(tables, key=lambda t: t.get('name') or '')

    def get_table(self, owner_uid, table_id):
        table = self.tables.get(table_id)
        return dict(table) if table and table.get('ownerUID') == owner_uid else None

    def create_table(self, owner_uid, table_data):
        table_id = f"table{len(self.tables) + 1}"
        self.tables[table_id] = {**table_data, 'ownerUID': owner_uid, 'id': table_id}
        return dict(self.tables[table_id])

    def update_table(self, owner_uid, table_id, update_data):
        self.tables[table_id].update(update_data)
        return dict(self.tables[table_id])

    def delete_table(self, owner_uid, table_id):
        del self.tables[table_id]

    def update_table_statuses(self, owner_uid, table_ids, status):
        for table_id in table_ids:
            self.tables[table_id]['status'] = status

    def create_forum_post(self, post_data):
        if self.fail_forum:
            raise RuntimeError('Firestore unavailable')
        post_id = f"post{len(self.forum_posts) + 1}"
        self.forum_posts[post_id] = {**post_data, 'id': post_id}
        return dict(self.forum_posts[post_id])

    def get_forum_posts(self, owner_uid):
        if self.fail_forum:
            raise RuntimeError('Firestore unavailable')
        posts = [dict(p) for p in self.forum_posts.values() if p.get('ownerUID') == owner_uid]
        return list(reversed(posts))


class FakeEmailService:
    def __init__(self, result=None):
        self.result = result or DispatchResult.ok('msg-1')
        self.sent = []

    def send(self, email):
        self.sent.append(email)
        return self.result


class FakeLLM:
    def __init__(self, result):
        self.result = result
        self.schema = None
        self.messages = None

    def with_structured_output(self, schema):
        self.schema = schema
        return self

    def invoke(self, messages):
        self.messages = messages
        return self.result
