# config/seed_floors.py
# Default floor plan for the default outlet, inserted on first start.

def _room(code, x, y, width, height, status="Booked", tenant_name=None):
    return {
        "id": code,
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "status": status,
        "tenantName": tenant_name,
    }


TEMP = "Sementara"

OSIX_FLOORS = [
    {
        "level": 1,
        "name": "Floor 1",
        "imageUrl": "https://api.stayvie.com/uploads/gallery/gallery-1763359927129-Denah-O-Six---Lantai-1.webp",
        "viewBox": "0 0 1500 3000",
        "rooms": [
            _room("C-120", 350, 150, 150, 350, "Booked", "Andi Wijaya"),
            _room("C-121", 650, 150, 150, 350),
            _room("C-122", 950, 150, 150, 350),
            _room("C-123", 1250, 150, 150, 350, TEMP),
            _room("B-119", 400, 675, 100, 375),
            _room("B-118", 500, 675, 100, 375),
            _room("B-117", 700, 675, 100, 375),
            _room("B-116", 800, 675, 100, 375),
            _room("A-110", 400, 1200, 100, 250),
            _room("A-111", 500, 1200, 100, 250),
            _room("A-112", 700, 1200, 100, 250),
            _room("A-115", 800, 1200, 100, 250),
            _room("B-109", 400, 1625, 150, 375),
            _room("B-108", 550, 1625, 150, 375, TEMP),
            _room("B-107", 750, 1625, 150, 375, TEMP),
            _room("B-106", 900, 1625, 150, 375, "Booked", "Budi Santoso"),
            _room("B-101", 400, 2150, 150, 350, TEMP),
            _room("B-102", 550, 2150, 150, 350, "Booked", "Citra Lestari"),
            _room("B-103", 750, 2150, 150, 350, TEMP),
            _room("B-105", 900, 2150, 150, 350),
        ],
    },
    {
        "level": 2,
        "name": "Floor 2",
        "imageUrl": "https://api.stayvie.com/uploads/gallery/gallery-1763359927608-Denah-O-Six---Lantai-2.webp",
        "viewBox": "0 0 1500 3000",
        "rooms": [
            _room("C-222", 350, 150, 150, 350, TEMP),
            _room("C-223", 500, 150, 150, 350, TEMP),
            _room("C-225", 700, 150, 150, 350, TEMP),
            _room("C-226", 850, 150, 150, 350),
            _room("C-227", 1050, 150, 150, 350),
            _room("C-228", 1200, 150, 150, 350, TEMP),
            _room("B-221", 400, 675, 100, 375),
            _room("B-220", 500, 675, 100, 375),
            _room("B-219", 700, 675, 100, 375),
            _room("B-218", 800, 675, 100, 375),
            _room("B-217", 1000, 675, 100, 375),
            _room("A-210", 400, 1200, 100, 250),
            _room("A-211", 500, 1200, 100, 250),
            _room("A-212", 700, 1200, 100, 250),
            _room("A-215", 800, 1200, 100, 250, TEMP),
            _room("B-216", 1000, 1200, 100, 250),
            _room("B-209", 400, 1625, 150, 375),
            _room("B-208", 550, 1625, 150, 375),
            _room("B-207", 750, 1625, 150, 375),
            _room("B-206", 900, 1625, 150, 375),
            _room("B-201", 400, 2150, 150, 350),
            _room("B-202", 550, 2150, 150, 350, TEMP),
            _room("B-203", 750, 2150, 150, 350),
            _room("B-205", 900, 2150, 150, 350),
        ],
    },
    {
        "level": 3,
        "name": "Floor 3",
        "imageUrl": "https://api.stayvie.com/uploads/gallery/gallery-1763359927973-Denah-O-Six---Lantai-3.webp",
        "viewBox": "0 0 1500 3000",
        "rooms": [
            _room("C-319", 350, 150, 150, 350),
            _room("C-320", 500, 150, 150, 350, TEMP),
            _room("C-321", 700, 150, 150, 350, TEMP),
            _room("C-322", 850, 150, 150, 350, TEMP),
            _room("C-323", 1050, 150, 150, 350, TEMP),
            _room("C-325", 1200, 150, 150, 350),
            _room("D-318", 400, 675, 150, 375),
            _room("D-317", 550, 675, 150, 375),
            _room("D-316", 750, 675, 150, 375),
            _room("D-315", 900, 675, 150, 375),
            _room("B-309", 400, 1200, 150, 250),
            _room("B-310", 550, 1200, 150, 250),
            _room("B-311", 750, 1200, 150, 250, TEMP),
            _room("B-312", 900, 1200, 150, 250),
            _room("D-308", 400, 1625, 150, 375),
            _room("D-307", 550, 1625, 150, 375),
            _room("D-306", 750, 1625, 150, 375),
            _room("D-301", 400, 2150, 150, 350),
            _room("D-302", 550, 2150, 150, 350),
            _room("D-303", 750, 2150, 150, 350),
            _room("D-305", 900, 2150, 150, 350),
        ],
    },
    {
        "level": 4,
        "name": "Floor 5 (Rooftop)",
        "imageUrl": "https://api.stayvie.com/uploads/gallery/gallery-1763359928337-Denah-O-Six---Lantai-5.webp",
        "viewBox": "0 0 1500 3000",
        "rooms": [
            _room("D-515", 400, 675, 150, 375),
            _room("D-512", 550, 675, 150, 375, TEMP),
            _room("D-511", 750, 675, 150, 375),
            _room("B-508", 400, 1200, 150, 250, "Booked", "Dewi K."),
            _room("B-509", 550, 1200, 150, 250, TEMP),
            _room("B-510", 750, 1200, 150, 250, TEMP),
            _room("D-507", 400, 1625, 150, 375),
            _room("D-506", 550, 1625, 150, 375),
            _room("D-505", 750, 1625, 150, 375, TEMP),
            _room("D-501", 400, 2150, 150, 350),
            _room("D-502", 550, 2150, 150, 350),
            _room("D-503", 750, 2150, 150, 350, TEMP),
        ],
    },
]
