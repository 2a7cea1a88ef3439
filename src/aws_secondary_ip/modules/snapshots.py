"""EBS snapshot lookup"""

from typing import Optional

import boto3

from ..core import BaseClient
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..models import SnapshotModel

logger = get_logger("snapshots")


def select_snapshot(
    snapshots: list[SnapshotModel], most_recent: bool = False
) -> SnapshotModel:
    """Oldest (default) or newest completed snapshot by start time."""
    completed = [s for s in snapshots if s.completed]
    if not completed:
        raise NotFoundError("Cannot find snapshot id!")
    return sorted(completed, key=lambda s: s.start_time, reverse=most_recent)[0]


class SnapshotClient(BaseClient):
    def __init__(
        self,
        profile: Optional[str] = None,
        session: Optional[boto3.Session] = None,
        region_name: Optional[str] = None,
    ):
        super().__init__(profile, session, region_name)

    def list_snapshots(self, volume_id: str) -> list[SnapshotModel]:
        """Completed snapshots of ``volume_id``."""
        ec2 = self.client("ec2")
        paginator = ec2.get_paginator("describe_snapshots")
        snapshots = []
        for page in paginator.paginate(
            Filters=[
                {"Name": "volume-id", "Values": [volume_id]},
                {"Name": "status", "Values": ["completed"]},
            ]
        ):
            for snap in page.get("Snapshots", []):
                snapshots.append(SnapshotModel.from_api(snap, region=self.region_name))
        return snapshots

    def find_snapshot_id(self, volume_id: str, most_recent: bool = False) -> str:
        snapshot = select_snapshot(self.list_snapshots(volume_id), most_recent)
        logger.debug("Snapshot ID is %s", snapshot.id)
        return snapshot.id
