# logic/storage/sql_store.py

from sqlalchemy import bindparam, text

from .base_store import RoomStore

OUTLET_COLUMNS = "id, slug, name, company_name"
FLOOR_COLUMNS = "id, outlet_id, level, name, image_url, view_box"
ROOM_COLUMNS = "id, outlet_id, floor_id, room_code, x, y, width, height, status, tenant_name"
USER_COLUMNS = "id, email, full_name, role"

# Columns a caller may change through update_*; anything else is ignored
OUTLET_EDITABLE = ("slug", "name", "company_name")
FLOOR_EDITABLE = ("level", "name", "image_url", "view_box")
ROOM_EDITABLE = ("room_code", "floor_id", "x", "y", "width", "height", "status", "tenant_name")


def _first(rows):
    return rows[0] if rows else None


def _set_clause(changes, editable):
    set_clauses = []
    values = {}
    for column in editable:
        if column in changes:
            set_clauses.append(f"{column} = :{column}")
            values[column] = changes[column]
    return set_clauses, values


class SqlRoomStore(RoomStore):

    # --- outlets ---

    def list_outlets(self):
        return self.db.run_query(f"SELECT {OUTLET_COLUMNS} FROM outlets ORDER BY name, id")

    def get_outlet_by_slug(self, slug):
        return _first(self.db.run_query(
            f"SELECT {OUTLET_COLUMNS} FROM outlets WHERE slug = :slug", {"slug": slug}
        ))

    def get_outlet_by_id(self, outlet_id):
        return _first(self.db.run_query(
            f"SELECT {OUTLET_COLUMNS} FROM outlets WHERE id = :id", {"id": outlet_id}
        ))

    def insert_outlet(self, slug, name, company_name):
        return _first(self.db.run_query(f"""
            INSERT INTO outlets (slug, name, company_name)
            VALUES (:slug, :name, :company_name)
            RETURNING {OUTLET_COLUMNS}
        """, {"slug": slug, "name": name, "company_name": company_name}))

    def update_outlet(self, outlet_id, changes):
        set_clauses, values = _set_clause(changes, OUTLET_EDITABLE)
        if not set_clauses:
            return self.get_outlet_by_id(outlet_id)
        values["outlet_id"] = outlet_id
        return _first(self.db.run_query(f"""
            UPDATE outlets
            SET {', '.join(set_clauses)}, updated_at = CURRENT_TIMESTAMP
            WHERE id = :outlet_id
            RETURNING {OUTLET_COLUMNS}
        """, values))

    def delete_outlet(self, outlet_id):
        params = {"outlet_id": outlet_id}

        def work(unit):
            images = unit.run_query(
                "SELECT image_url FROM floors WHERE outlet_id = :outlet_id", params
            )
            unit.run_query("DELETE FROM rooms WHERE outlet_id = :outlet_id", params)
            unit.run_query("DELETE FROM floors WHERE outlet_id = :outlet_id", params)
            deleted = unit.run_query(
                "DELETE FROM outlets WHERE id = :outlet_id RETURNING id", params
            )
            if not deleted:
                return None
            return [row["image_url"] for row in images if row["image_url"]]

        return self.db.run_in_transaction(work)

    # --- floors ---

    def list_floors(self, outlet_id):
        return self.db.run_query(f"""
            SELECT {FLOOR_COLUMNS} FROM floors
            WHERE outlet_id = :outlet_id
            ORDER BY level
        """, {"outlet_id": outlet_id})

    def get_floor(self, outlet_id, level):
        return _first(self.db.run_query(f"""
            SELECT {FLOOR_COLUMNS} FROM floors
            WHERE outlet_id = :outlet_id AND level = :level
        """, {"outlet_id": outlet_id, "level": level}))

    def insert_floor(self, outlet_id, level, name, view_box, image_url=""):
        return _first(self.db.run_query(f"""
            INSERT INTO floors (outlet_id, level, name, image_url, view_box)
            VALUES (:outlet_id, :level, :name, :image_url, :view_box)
            RETURNING {FLOOR_COLUMNS}
        """, {
            "outlet_id": outlet_id,
            "level": level,
            "name": name,
            "image_url": image_url or "",
            "view_box": view_box,
        }))

    def update_floor(self, floor_id, changes):
        set_clauses, values = _set_clause(changes, FLOOR_EDITABLE)
        if not set_clauses:
            return _first(self.db.run_query(
                f"SELECT {FLOOR_COLUMNS} FROM floors WHERE id = :floor_id", {"floor_id": floor_id}
            ))
        values["floor_id"] = floor_id
        return _first(self.db.run_query(f"""
            UPDATE floors
            SET {', '.join(set_clauses)}, updated_at = CURRENT_TIMESTAMP
            WHERE id = :floor_id
            RETURNING {FLOOR_COLUMNS}
        """, values))

    def set_floor_image(self, floor_id, image_url):
        params = {"floor_id": floor_id, "image_url": image_url}

        def work(unit):
            previous = _first(unit.run_query(
                "SELECT image_url FROM floors WHERE id = :floor_id", params
            ))
            unit.run_query("""
                UPDATE floors
                SET image_url = :image_url, updated_at = CURRENT_TIMESTAMP
                WHERE id = :floor_id
            """, params)
            return previous["image_url"] if previous else None

        return self.db.run_in_transaction(work)

    def delete_floor(self, floor_id):
        params = {"floor_id": floor_id}

        def work(unit):
            unit.run_query("DELETE FROM rooms WHERE floor_id = :floor_id", params)
            return _first(unit.run_query(
                f"DELETE FROM floors WHERE id = :floor_id RETURNING {FLOOR_COLUMNS}", params
            ))

        return self.db.run_in_transaction(work)

    # --- rooms ---

    def list_rooms(self, outlet_id, floor_id=None):
        return self.db.run_query(f"""
            SELECT {ROOM_COLUMNS} FROM rooms
            WHERE outlet_id = :outlet_id
              AND (:floor_id IS NULL OR floor_id = :floor_id)
            ORDER BY room_code
        """, {"outlet_id": outlet_id, "floor_id": floor_id})

    def get_room(self, outlet_id, code):
        return _first(self.db.run_query(f"""
            SELECT {ROOM_COLUMNS} FROM rooms
            WHERE outlet_id = :outlet_id AND room_code = :room_code
        """, {"outlet_id": outlet_id, "room_code": code}))

    def insert_room(self, row):
        return _first(self.db.run_query(f"""
            INSERT INTO rooms (outlet_id, floor_id, room_code, x, y, width, height, status, tenant_name)
            VALUES (:outlet_id, :floor_id, :room_code, :x, :y, :width, :height, :status, :tenant_name)
            RETURNING {ROOM_COLUMNS}
        """, row))

    def update_room(self, room_id, changes):
        set_clauses, values = _set_clause(changes, ROOM_EDITABLE)
        if not set_clauses:
            return _first(self.db.run_query(
                f"SELECT {ROOM_COLUMNS} FROM rooms WHERE id = :room_id", {"room_id": room_id}
            ))
        values["room_id"] = room_id
        return _first(self.db.run_query(f"""
            UPDATE rooms
            SET {', '.join(set_clauses)}, updated_at = CURRENT_TIMESTAMP
            WHERE id = :room_id
            RETURNING {ROOM_COLUMNS}
        """, values))

    def delete_room(self, outlet_id, code):
        return _first(self.db.run_query(f"""
            DELETE FROM rooms
            WHERE outlet_id = :outlet_id AND room_code = :room_code
            RETURNING {ROOM_COLUMNS}
        """, {"outlet_id": outlet_id, "room_code": code}))

    def bulk_update_status(self, outlet_id, codes, status):
        query = text(f"""
            UPDATE rooms
            SET status = :status, updated_at = CURRENT_TIMESTAMP
            WHERE outlet_id = :outlet_id AND room_code IN :codes
            RETURNING {ROOM_COLUMNS}
        """).bindparams(bindparam("codes", expanding=True))
        rows = self.db.run_query(query, {
            "outlet_id": outlet_id,
            "codes": list(codes),
            "status": status,
        })
        return sorted(rows, key=lambda r: r["room_code"])

    # --- users ---

    def get_user_by_id(self, user_id):
        return _first(self.db.run_query(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = :user_id", {"user_id": user_id}
        ))

    def get_user_by_email(self, email):
        # Only lookup that carries the hash, for password checks
        return _first(self.db.run_query(
            f"SELECT {USER_COLUMNS}, password_hash FROM users WHERE email = :email",
            {"email": email},
        ))

    def list_users(self):
        return self.db.run_query(f"SELECT {USER_COLUMNS} FROM users ORDER BY email")

    def insert_user(self, email, full_name, password_hash, role):
        return _first(self.db.run_query(f"""
            INSERT INTO users (email, full_name, password_hash, role)
            VALUES (:email, :full_name, :password_hash, :role)
            RETURNING {USER_COLUMNS}
        """, {
            "email": email,
            "full_name": full_name,
            "password_hash": password_hash,
            "role": role,
        }))

    def delete_user(self, user_id):
        return _first(self.db.run_query(
            f"DELETE FROM users WHERE id = :user_id RETURNING {USER_COLUMNS}",
            {"user_id": user_id},
        ))
