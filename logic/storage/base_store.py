from abc import ABC, abstractmethod

class RoomStore(ABC):
    """Everything the handlers need from a backing store.

    Methods return plain storage rows (dicts keyed by column name) or None
    when the addressed row does not exist.
    """

    def __init__(self, db):
        self.db = db

    # --- outlets ---

    @abstractmethod
    def list_outlets(self):
        pass

    @abstractmethod
    def get_outlet_by_slug(self, slug):
        pass

    @abstractmethod
    def get_outlet_by_id(self, outlet_id):
        pass

    @abstractmethod
    def insert_outlet(self, slug, name, company_name):
        pass

    @abstractmethod
    def update_outlet(self, outlet_id, changes):
        pass

    @abstractmethod
    def delete_outlet(self, outlet_id):
        """Delete the outlet with its floors and rooms.

        Returns the image URLs its floors referenced, or None if the outlet
        did not exist.
        """

    # --- floors ---

    @abstractmethod
    def list_floors(self, outlet_id):
        pass

    @abstractmethod
    def get_floor(self, outlet_id, level):
        pass

    @abstractmethod
    def insert_floor(self, outlet_id, level, name, view_box, image_url=""):
        pass

    @abstractmethod
    def update_floor(self, floor_id, changes):
        pass

    @abstractmethod
    def set_floor_image(self, floor_id, image_url):
        """Returns the image URL that was replaced."""

    @abstractmethod
    def delete_floor(self, floor_id):
        """Delete the floor and its rooms, returning the deleted floor row."""

    # --- rooms ---

    @abstractmethod
    def list_rooms(self, outlet_id, floor_id=None):
        pass

    @abstractmethod
    def get_room(self, outlet_id, code):
        pass

    @abstractmethod
    def insert_room(self, row):
        pass

    @abstractmethod
    def update_room(self, room_id, changes):
        pass

    @abstractmethod
    def delete_room(self, outlet_id, code):
        pass

    @abstractmethod
    def bulk_update_status(self, outlet_id, codes, status):
        """Set ``status`` on every listed room of the outlet in one write."""

    # --- users ---

    @abstractmethod
    def get_user_by_id(self, user_id):
        pass

    @abstractmethod
    def get_user_by_email(self, email):
        pass

    @abstractmethod
    def list_users(self):
        pass

    @abstractmethod
    def insert_user(self, email, full_name, password_hash, role):
        pass

    @abstractmethod
    def delete_user(self, user_id):
        pass
