"""Sample records used by the demo seeding endpoint and script."""
from __future__ import annotations

from .collections import BLOG, GALLERY, PORTFOLIO, TESTIMONIALS, VIDEOS

DEMO_CONTENT = {
    PORTFOLIO: [
        {
            "title": "MEVLANA SITESI (YAPILI) KIRALIK 3+1 DAIRE",
            "location": "Ankara / Altindag",
            "tag": "Kiralik",
            "image": "",
            "link": "#",
            "transactionType": "rent",
            "propertyType": "apartment",
        },
        {
            "title": "KAZAKISTAN CADDESI SATILIK 1+1 LUKS DAIRE",
            "location": "Ankara / Cankaya",
            "tag": "Satilik",
            "image": "",
            "link": "#",
            "transactionType": "sale",
            "propertyType": "apartment",
        },
    ],
    BLOG: [
        {"title": "Yilin Ilk 8 Ayinda 2 Milyon Gayrimenkul Satildi", "date": "2025-09-14", "image": "", "link": "#"},
        {"title": "Turkiye Konut Piyasasinda Yeni Donem", "date": "2025-09-09", "image": "", "link": "#"},
    ],
    GALLERY: [
        {"url": "/uploads/demo-office.jpg", "category": "Genel"},
        {"url": "/uploads/demo-award.jpg", "category": "Basarilarim"},
    ],
    VIDEOS: [
        {"title": "Gayrimenkul Profesyoneli Ol", "youtubeId": "LFq5vXOnNaY"},
        {"title": "Markalasma 1. Bolum", "youtubeId": "Rx5CB_lJ8fQ"},
    ],
    TESTIMONIALS: [
        {
            "author": "Metin Polat",
            "date": "2025-04-06",
            "text": "Found a reliable tenant for my shop within days and helped at every step.",
        },
        {
            "author": "Nazli Alper",
            "date": "2023-11-15",
            "text": "Friendly and helpful, we found the rental we were looking for very quickly.",
        },
        {
            "author": "Ali Tamer",
            "date": "2023-08-14",
            "text": "Picked us up from the bus terminal and found a great flat for my son.",
        },
    ],
}
