from datetime import date, datetime, timezone
from io import BytesIO

import pandas as pd

from community_hub.reports.services import daily_counts


def test_daily_counts_fills_missing_days():
    today = date(2026, 3, 10)
    created = [
        datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc),
        datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc),
        datetime(2026, 3, 8, 23, 59, tzinfo=timezone.utc),
        datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc),  # вне окна
    ]
    trend = daily_counts(created, today)

    assert len(trend) == 7
    assert trend[0] == {"date": "2026-03-04", "count": 0}
    assert trend[-3] == {"date": "2026-03-08", "count": 1}
    assert trend[-1] == {"date": "2026-03-10", "count": 2}


def test_daily_counts_empty():
    trend = daily_counts([], date(2026, 3, 10))
    assert [d["count"] for d in trend] == [0] * 7


async def test_admin_stats(client, make_submission):
    await make_submission("p1")
    await make_submission("v1", status="validated")
    await make_submission("r1", status="rejected", fileType="audio", fileName="a.mp3")
    await make_submission("x1", userEmail="second@example.org")
    await client.post("/validation-queue", json={"submissionId": "p1", "adminEmail": "mod@example.org"})

    stats = (await client.get("/admin/stats")).json()

    assert stats["totalSubmissions"] == 4
    assert stats["pendingSubmissions"] == 2
    assert stats["validatedSubmissions"] == 1
    assert stats["rejectedSubmissions"] == 1
    assert stats["totalVolunteers"] == 2
    assert stats["todaySubmissions"] == 4
    assert stats["validationQueue"] == 1
    assert len(stats["recentSubmissions"]) == 4
    assert "preview" not in stats["recentSubmissions"][0]
    assert {"type": "image", "count": 3} in stats["fileTypeStats"]
    assert len(stats["weeklyTrend"]) == 7
    assert stats["weeklyTrend"][-1]["count"] == 4


async def test_export_requires_admin(client):
    resp = await client.get("/admin/reports/submissions/export")
    assert resp.status_code == 401


async def test_export_xlsx_with_filters(client, make_submission, make_admin):
    await make_admin("mod@example.org")
    await make_submission("p1", preview="AAAA")
    await make_submission("r1", status="failed")
    await make_submission("r2", status="rejected", fileType="video", fileName="v.mp4")

    resp = await client.get(
        "/admin/reports/submissions/export",
        params={"status": "rejected", "fileType": "image"},
        headers={"x-admin-email": "mod@example.org"},
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert "submissions_rejected_image.xlsx" in resp.headers["content-disposition"]

    df = pd.read_excel(BytesIO(resp.content), engine="openpyxl")
    assert list(df["id"]) == ["r1"]
    assert "preview" not in df.columns
