"""
Pipelines — Kubeflow Pipelines (KFP v2) components and pipeline definitions.

Each component runs in the project image built from the repository
``Dockerfile``, which has ``bill_ingest`` installed, so component bodies
import it directly::

    docker build -t bill-ingest:latest .

Set ``BILL_INGEST_IMAGE`` to the pushed image reference before compiling
when the cluster pulls from a registry.
"""

import os

BASE_IMAGE = os.environ.get("BILL_INGEST_IMAGE", "bill-ingest:latest")
