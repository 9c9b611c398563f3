from fastapi.testclient import TestClient
from willcall.main import app

client = TestClient(app)

BPT = b"Ticket,Last,First\n101,Smith,John\n102,Smith,John\n"
GS = b"Order,Last,First,Qty,Date,Time,Offer,Ticket\n,Smith,John,5,,,,T9\n"
GROUPON = b"Voucher,Name,Status\nLG-1,jane doe,Purchased\nLG-2,bob ray,Refunded\n"


def _files(**overrides):
    files = {
        "bpt": ("bpt.csv", BPT, "text/csv"),
        "gs": ("goldstar.csv", GS, "text/csv"),
        "groupon": ("groupon.csv", GROUPON, "text/csv"),
    }
    files.update(overrides)
    return files

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_will_call_merges_uploads():
    r = client.post("/will-call", files=_files())
    assert r.status_code == 200

    data = r.json()
    assert data["will_call_csv"]["content"] == (
        "Last,First,Qty,Source,Tickets\n"
        '"Doe","Jane",1,"Groupon","LG-1"\n'
        '"Smith","John",7,"BPT","101,..."\n'
    )

    report = data["report"]
    assert report["summary"]["input_rows"] == 4
    assert report["summary"]["merged_rows"] == 2
    assert report["summary"]["total_quantity"] == 8
    assert [s["key"] for s in report["sources"]] == ["bpt", "gs", "groupon"]

    # LG-2 was refunded, not purchased
    assert report["summary"]["warnings"] == 1
    assert report["warnings"][0]["issue"] == "not_purchased"
    assert report["warnings"][0]["source"] == "Groupon"

def test_will_call_accepts_unpurchased_groupon_when_asked():
    r = client.post("/will-call?groupon_require_purchased=false", files=_files())
    assert r.status_code == 200
    assert '"Ray","Bob",1,"Groupon","LG-2"' in r.json()["will_call_csv"]["content"]

def test_will_call_with_extra_file():
    extra = b"Last,First,Qty,Source,Ticket\nVip,Guest,2,Box Office,R1\n"
    r = client.post("/will-call", files=_files(extra=("extra.csv", extra, "text/csv")))
    assert r.status_code == 200

    content = r.json()["will_call_csv"]["content"]
    assert '"Vip","Guest",2,"(Reserved)","R1"' in content
    # the header line of the extra file has commas too
    assert '"Last","First",1,"(Reserved)","Ticket"' in content

def test_will_call_rejects_non_csv():
    r = client.post("/will-call", files=_files(bpt=("bpt.txt", BPT, "text/plain")))
    assert r.status_code == 422

def test_will_call_requires_core_exports():
    files = _files()
    del files["groupon"]
    r = client.post("/will-call", files=files)
    assert r.status_code == 422
