"""Default facility catalog used on first run."""

from datetime import datetime

from facility_booking.domain.facility import Facility

_SEED = [
    {
        "id": "1",
        "name": "Auditorium Utama",
        "capacity": 500,
        "location": "Gedung A Lantai 1",
        "description": "Auditorium modern dengan fasilitas multimedia lengkap untuk acara besar kampus",
        "image": "https://images.unsplash.com/photo-1540575467063-178a50c2df87?w=800&q=80",
        "features": ("AC", "Proyektor 4K", "Sound System", "Lighting Stage", "WiFi"),
    },
    {
        "id": "2",
        "name": "Ruang Seminar 1",
        "capacity": 100,
        "location": "Gedung B Lantai 3",
        "description": "Ruang seminar dengan layout fleksibel untuk diskusi dan presentasi",
        "image": "https://images.unsplash.com/photo-1517502884422-41eaead166d4?w=800&q=80",
        "features": ("AC", "Proyektor", "Whiteboard", "WiFi", "Meja Lipat"),
    },
    {
        "id": "3",
        "name": "Lab Komputer",
        "capacity": 50,
        "location": "Gedung C Lantai 2",
        "description": "Laboratorium komputer dengan spesifikasi tinggi untuk pembelajaran dan riset",
        "image": "https://images.unsplash.com/photo-1498050108023-c5249f4df085?w=800&q=80",
        "features": ("50 PC High-End", "AC", "Proyektor", "WiFi Gigabit", "Software Development"),
    },
    {
        "id": "4",
        "name": "Meeting Room Executive",
        "capacity": 20,
        "location": "Gedung D Lantai 5",
        "description": "Ruang meeting eksklusif dengan pemandangan kota untuk pertemuan penting",
        "image": "https://images.unsplash.com/photo-1497366216548-37526070297c?w=800&q=80",
        "features": ("AC", "Smart TV", "Video Conference", "Pantry", "WiFi Premium"),
    },
    {
        "id": "5",
        "name": "Lapangan Olahraga Indoor",
        "capacity": 200,
        "location": "Gedung Sport Center",
        "description": "Fasilitas olahraga indoor multifungsi untuk berbagai jenis aktivitas",
        "image": "https://images.unsplash.com/photo-1546483875-ad9014c88eba?w=800&q=80",
        "features": ("Basket Court", "Futsal Court", "AC", "Tribun", "Locker Room"),
    },
    {
        "id": "6",
        "name": "Ruang Kelas Multimedia",
        "capacity": 40,
        "location": "Gedung E Lantai 2",
        "description": "Kelas modern dengan teknologi pembelajaran interaktif",
        "image": "https://images.unsplash.com/photo-1562774053-701939374585?w=800&q=80",
        "features": ("AC", "Interactive Board", "Tablet PC", "WiFi", "Comfortable Seating"),
    },
]


def default_facilities(created_at: datetime) -> list[Facility]:
    """The six-entry starter catalog, all available, stamped with created_at."""
    return [Facility(status="available", created_at=created_at, **entry) for entry in _SEED]
