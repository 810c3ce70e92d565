import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

import notesapp.core.services.note_service as ns
from notesapp.core.filters import NoteFilter
from notesapp.core.pagination import Page
from notesapp.core.schemas.notes import NoteCreate, NoteUpdate
from notesapp.core.services.note_service import NoteService, parse_note_id
from notesapp.exceptions import DatabaseError, NotFoundError, ValidationError


class Dummy:
    def __init__(self, **kw):
        self.__dict__.update(kw)

    def set_tags(self, names):
        self.tags = list(names)


def make_note(author_id, **kw):
    now = datetime.now(timezone.utc)
    data = dict(
        id=uuid.uuid4(),
        author_id=author_id,
        title="T",
        content="c",
        tags=[],
        is_public=False,
        created_at=now,
        updated_at=now,
    )
    data.update(kw)
    return Dummy(**data)


class FakeNoteRepo:
    def __init__(self, notes=()):
        self.notes = {n.id: n for n in notes}
        self.created = None
        self.saved = []
        self.found_with = None
        self.fail = None

    def _maybe_fail(self):
        if self.fail:
            raise self.fail

    async def create_note(self, data, tags):
        self._maybe_fail()
        self.created = (data, tags)
        note = make_note(data["author_id"], **{k: v for k, v in data.items() if k != "author_id"})
        note.tags = tags
        return note

    async def get_by_id_and_user(self, nid, uid):
        self._maybe_fail()
        note = self.notes.get(nid)
        return note if note and note.author_id == uid else None

    async def get_visible(self, nid, uid):
        self._maybe_fail()
        note = self.notes.get(nid)
        if note and (note.is_public or note.author_id == uid):
            return note
        return None

    async def save(self, note):
        self.saved.append(note)
        return note

    async def delete_note(self, nid, uid):
        self._maybe_fail()
        note = self.notes.get(nid)
        if note and note.author_id == uid:
            del self.notes[nid]
            return True
        return False

    async def find(self, note_filter: NoteFilter, page: Page):
        self._maybe_fail()
        self.found_with = (note_filter, page)
        matching = [n for n in self.notes.values() if note_filter.matches(n)]
        return matching[page.offset : page.offset + page.size], len(matching)


class FakeUserRepo:
    def __init__(self, usernames):
        self.usernames = usernames
        self.lookups = []

    async def get_usernames(self, ids):
        ids = set(ids)
        self.lookups.append(ids)
        return {i: self.usernames[i] for i in ids if i in self.usernames}


class FakeSession:
    def __init__(self):
        self.rollbacks = 0

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def owner_id():
    return uuid.uuid4()


@pytest.fixture
def stranger_id():
    return uuid.uuid4()


@pytest.fixture
def build_service(monkeypatch, owner_id, stranger_id):
    def _build(notes=()):
        note_repo = FakeNoteRepo(notes)
        user_repo = FakeUserRepo({owner_id: "alice", stranger_id: "bob"})
        monkeypatch.setattr(ns, "NoteRepository", lambda s: note_repo, raising=True)
        monkeypatch.setattr(ns, "UserRepository", lambda s: user_repo, raising=True)
        session = FakeSession()
        return NoteService(session=session), note_repo, user_repo, session

    return _build


def test_parse_note_id():
    uid = uuid.uuid4()
    assert parse_note_id(str(uid)) == uid
    assert parse_note_id(uid) == uid
    assert parse_note_id("not-an-id") is None


async def test_create_trims_and_defaults(build_service, owner_id):
    svc, repo, _, _ = build_service()
    resp = await svc.create_note(
        owner_id, NoteCreate(title="  Milk ", content=" eggs ", tags=[" home", "home", ""])
    )

    data, tags = repo.created
    assert data == {"title": "Milk", "content": "eggs", "is_public": False, "author_id": owner_id}
    assert tags == ["home"]
    assert resp.author.id == owner_id
    assert resp.author.username == "alice"


async def test_create_non_list_tags_become_empty(build_service, owner_id):
    svc, repo, _, _ = build_service()
    await svc.create_note(owner_id, NoteCreate(title="t", content="c", tags="home"))
    assert repo.created[1] == []


async def test_create_validation_runs_before_persistence(build_service, owner_id):
    svc, repo, _, _ = build_service()
    with pytest.raises(ValidationError) as exc:
        await svc.create_note(owner_id, NoteCreate(title="x" * 101, content="c"))
    assert exc.value.message == "Title must be 100 characters or less"
    assert repo.created is None


async def test_get_note_visibility(build_service, owner_id, stranger_id):
    private = make_note(owner_id)
    public = make_note(owner_id, is_public=True)
    svc, *_ = build_service([private, public])

    assert (await svc.get_note(str(private.id), owner_id)).id == private.id
    assert (await svc.get_note(str(public.id), None)).id == public.id
    assert (await svc.get_note(str(public.id), stranger_id)).id == public.id

    for caller in (None, stranger_id):
        with pytest.raises(NotFoundError) as exc:
            await svc.get_note(str(private.id), caller)
        assert exc.value.message == "Note not found"


async def test_get_note_malformed_id(build_service, owner_id):
    svc, *_ = build_service()
    with pytest.raises(NotFoundError):
        await svc.get_note("123", owner_id)


async def test_update_non_owner_is_not_found_even_with_bad_payload(build_service, owner_id, stranger_id):
    note = make_note(owner_id, title="Original")
    svc, repo, _, _ = build_service([note])

    with pytest.raises(NotFoundError) as exc:
        await svc.update_note(str(note.id), stranger_id, NoteUpdate(title="x" * 500))
    assert exc.value.message == "Note not found or you do not have permission to edit it"
    assert note.title == "Original"
    assert repo.saved == []


async def test_update_applies_only_supplied_fields(build_service, owner_id):
    note = make_note(owner_id, title="Old", content="Body", tags=["a"], is_public=False)
    svc, repo, _, _ = build_service([note])

    resp = await svc.update_note(str(note.id), owner_id, NoteUpdate(title=" New ", content=None))

    assert resp.title == "New"
    assert resp.content == "Body"
    assert resp.tags == ["a"]
    assert resp.is_public is False
    assert repo.saved == [note]


async def test_update_tags_and_visibility(build_service, owner_id):
    note = make_note(owner_id, tags=["a"])
    svc, *_ = build_service([note])

    resp = await svc.update_note(
        str(note.id), owner_id, NoteUpdate.model_validate({"tags": ["b", " c "], "isPublic": True})
    )
    assert resp.tags == ["b", "c"]
    assert resp.is_public is True


async def test_update_invalid_field_leaves_note_untouched(build_service, owner_id):
    note = make_note(owner_id, title="Old", content="Body")
    svc, repo, _, _ = build_service([note])

    with pytest.raises(ValidationError):
        await svc.update_note(str(note.id), owner_id, NoteUpdate(title="ok", content="   "))
    assert note.title == "Old"
    assert repo.saved == []


async def test_delete(build_service, owner_id, stranger_id):
    note = make_note(owner_id)
    svc, repo, _, _ = build_service([note])

    with pytest.raises(NotFoundError) as exc:
        await svc.delete_note(str(note.id), stranger_id)
    assert exc.value.message == "Note not found or you do not have permission to delete it"
    assert note.id in repo.notes

    await svc.delete_note(str(note.id), owner_id)
    assert note.id not in repo.notes

    with pytest.raises(NotFoundError):
        await svc.delete_note(str(note.id), owner_id)


async def test_list_user_notes_builds_owned_filter(build_service, owner_id, stranger_id):
    mine = [make_note(owner_id, tags=["work"]) for _ in range(3)]
    theirs = make_note(stranger_id, is_public=True, tags=["work"])
    svc, repo, users, _ = build_service([*mine, theirs])

    resp = await svc.list_user_notes(owner_id, page="1", limit="2", tags="work")

    note_filter, page = repo.found_with
    assert note_filter.author_id == owner_id
    assert note_filter.tags == ("work",)
    assert page == Page(number=1, size=2)
    assert resp.total == 3
    assert resp.total_pages == 2
    assert resp.current_page == 1
    assert len(resp.notes) == 2
    assert all(n.author.id == owner_id for n in resp.notes)
    # one batched username lookup for the whole page
    assert users.lookups == [{owner_id}]


async def test_list_public_notes_only_public(build_service, owner_id, stranger_id):
    notes = [
        make_note(owner_id, is_public=True),
        make_note(owner_id, is_public=False),
        make_note(stranger_id, is_public=True),
    ]
    svc, repo, users, _ = build_service(notes)

    resp = await svc.list_public_notes()

    assert resp.total == 2
    assert all(n.is_public for n in resp.notes)
    assert {n.author.username for n in resp.notes} == {"alice", "bob"}
    assert len(users.lookups) == 1


async def test_database_errors_are_wrapped(build_service, owner_id):
    svc, repo, _, session = build_service()
    repo.fail = OperationalError("SELECT", {}, Exception("boom"))

    with pytest.raises(DatabaseError) as exc:
        await svc.list_user_notes(owner_id)
    assert exc.value.message == "Server error fetching notes"
    assert session.rollbacks == 1

    with pytest.raises(DatabaseError) as exc:
        await svc.create_note(owner_id, NoteCreate(title="t", content="c"))
    assert exc.value.message == "Server error creating note"
