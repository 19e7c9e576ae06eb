"""SQLAlchemy models mirroring the JSON collection files.

Every table has an autoincrement integer ``id`` that SQLite never reuses
(``sqlite_autoincrement``) plus an ``extra_fields`` JSON column holding
caller-supplied keys outside the declared columns.
"""
from __future__ import annotations

from typing import Dict, Type

from sqlalchemy import JSON, Boolean, Column, Integer, String, Text

from realty_api.domain import collections as names

from .session import Base


class RecordMixin:
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    extra_fields = Column(JSON, nullable=True, default=dict)


class User(RecordMixin, Base):
    __tablename__ = names.USERS

    username = Column(String(255), unique=True, nullable=True)
    password = Column(Text, nullable=True)


class PortfolioItem(RecordMixin, Base):
    __tablename__ = names.PORTFOLIO

    title = Column(Text)
    location = Column(Text)
    tag = Column(Text)
    image = Column(Text)
    link = Column(Text)
    transactionType = Column(Text)
    propertyType = Column(Text)
    date = Column(Text)


class BlogPost(RecordMixin, Base):
    __tablename__ = names.BLOG

    title = Column(Text)
    date = Column(Text)
    image = Column(Text)
    link = Column(Text)
    text = Column(Text)


class GalleryImage(RecordMixin, Base):
    __tablename__ = names.GALLERY

    url = Column(Text)
    category = Column(Text)
    date = Column(Text)


class Video(RecordMixin, Base):
    __tablename__ = names.VIDEOS

    title = Column(Text)
    youtubeId = Column(Text)
    date = Column(Text)


class Testimonial(RecordMixin, Base):
    __tablename__ = names.TESTIMONIALS

    author = Column(Text)
    text = Column(Text)
    date = Column(Text)


class Message(RecordMixin, Base):
    __tablename__ = names.MESSAGES

    name = Column(Text)
    phone = Column(Text)
    email = Column(Text)
    topic = Column(Text)
    message = Column(Text)
    date = Column(Text)
    read = Column(Boolean)


MODELS: Dict[str, Type[RecordMixin]] = {
    model.__tablename__: model
    for model in (User, PortfolioItem, BlogPost, GalleryImage, Video, Testimonial, Message)
}
