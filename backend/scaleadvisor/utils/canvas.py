# scaleadvisor/utils/canvas.py
"""
Infra canvas support: Terraform/Kubernetes previews rendered from a list of
abstract nodes (db, lb, api), plus the pan/zoom bookkeeping the canvas
widget uses to map screen coordinates onto node coordinates.
"""
from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple

MIN_ZOOM = 0.8
MAX_ZOOM = 3.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9
DEFAULT_REPLICAS = 2
MAX_REPLICAS = 10


# ---------- Node helpers ----------
def _get(node: Any, key: str, default: Any = None) -> Any:
    if isinstance(node, Mapping):
        return node.get(key, default)
    return getattr(node, key, default)


def _prop(node: Any, key: str) -> Any:
    return _get(_get(node, "props") or {}, key)


def canvas_slug(project_name: str) -> str:
    slug = re.sub(r"\s+", "-", (project_name or "").lower())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return slug or "app"


def clamp_replicas(value: Any) -> int:
    try:
        replicas = float(DEFAULT_REPLICAS if value is None else value)
    except (TypeError, ValueError):
        replicas = math.nan
    if not math.isfinite(replicas):
        return 1
    return int(max(1, min(MAX_REPLICAS, replicas)))


# ---------- Previews ----------
def render_terraform_preview(project_name: str, nodes: Iterable[Any]) -> str:
    nodes = list(nodes)
    slug = canvas_slug(project_name)
    has_lb = any(_get(n, "type") == "lb" for n in nodes)
    api_nodes = [n for n in nodes if _get(n, "type") == "api"]
    db_node = next((n for n in nodes if _get(n, "type") == "db"), None)

    header = (
        f"# Terraform (preview) for {project_name}\n"
        'variable "aws_region" { default = "us-west-2" }\n'
        'provider "aws" { region = var.aws_region }\n'
    )
    vpc = (
        "# (preview) minimal VPC + security group omitted for brevity\n"
        "# Assume base VPC, subnets, and SG are defined elsewhere in generated output\n"
    )

    db = ""
    if db_node is not None:
        engine, username = ("mysql", "admin") if _prop(db_node, "engine") == "mysql" else ("postgres", "postgres")
        db = (
            'resource "aws_db_instance" "app" {\n'
            f'  identifier = "{slug}-db"\n'
            f'  engine = "{engine}"\n'
            '  instance_class = "db.t3.micro"\n'
            "  allocated_storage = 20\n"
            f'  username = "{username}"\n'
            '  password = "change-me"\n'
            "  skip_final_snapshot = true\n"
            "}\n"
        )

    lb = ""
    if has_lb:
        lb = (
            'resource "aws_lb" "main" {\n'
            f'  name               = "{slug}-alb"\n'
            "  internal           = false\n"
            '  load_balancer_type = "application"\n'
            "}\n"
        )

    hint = "# Hint: add target group + listener to route traffic to your services\n" if api_nodes else ""

    return f"{header}\n{vpc}\n{db}{lb}{hint}".strip() + "\n"


def render_kubernetes_preview(project_name: str, nodes: Iterable[Any]) -> str:
    nodes = list(nodes)
    slug = canvas_slug(project_name)
    has_lb = any(_get(n, "type") == "lb" for n in nodes)
    api_nodes = [n for n in nodes if _get(n, "type") == "api"]

    header = f"# Kubernetes (preview) for {project_name}\n"

    if not api_nodes:
        deployments = "# No API nodes yet. Add an API node to preview deployments."
    else:
        deployments = "\n".join(
            "---\n"
            "apiVersion: apps/v1\n"
            "kind: Deployment\n"
            "metadata:\n"
            f"  name: {slug}-api-{i}\n"
            "  labels:\n"
            f"    app: {slug}-api\n"
            "spec:\n"
            f"  replicas: {clamp_replicas(_prop(node, 'replicas'))}\n"
            "  selector:\n"
            "    matchLabels:\n"
            f"      app: {slug}-api\n"
            "  template:\n"
            "    metadata:\n"
            "      labels:\n"
            f"        app: {slug}-api\n"
            "    spec:\n"
            "      containers:\n"
            "      - name: api\n"
            f"        image: {slug}:latest\n"
            "        ports:\n"
            "        - containerPort: 3000\n"
            for i, node in enumerate(api_nodes, start=1)
        )

    service = ""
    if api_nodes:
        service = (
            "---\n"
            "apiVersion: v1\n"
            "kind: Service\n"
            "metadata:\n"
            f"  name: {slug}-api-svc\n"
            "spec:\n"
            "  selector:\n"
            f"    app: {slug}-api\n"
            "  ports:\n"
            "    - protocol: TCP\n"
            "      port: 80\n"
            "      targetPort: 3000\n"
            f"  type: {'LoadBalancer' if has_lb else 'ClusterIP'}\n"
        )

    return f"{header}\n{deployments}\n{service}".strip() + "\n"


# ---------- Viewport ----------
def _safe(n: float, fallback: float = 0.0) -> float:
    return n if isinstance(n, (int, float)) and math.isfinite(n) else fallback


def clamp_zoom(z: float) -> float:
    return min(MAX_ZOOM, max(MIN_ZOOM, z if isinstance(z, (int, float)) and math.isfinite(z) else 1.0))


@dataclass
class Viewport:
    """Screen-space pan offset and zoom of the canvas."""
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    def __post_init__(self):
        self.zoom = clamp_zoom(self.zoom)
        self.pan_x = _safe(self.pan_x)
        self.pan_y = _safe(self.pan_y)

    def screen_to_world(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.pan_x) / self.zoom, (y - self.pan_y) / self.zoom

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.zoom + self.pan_x, y * self.zoom + self.pan_y

    def zoom_at(self, cursor_x: float, cursor_y: float, zoom_in: bool) -> None:
        """Zoom one step, keeping the world point under the cursor fixed."""
        proposed = clamp_zoom(self.zoom * (ZOOM_IN_FACTOR if zoom_in else ZOOM_OUT_FACTOR))
        cursor_x, cursor_y = _safe(cursor_x), _safe(cursor_y)
        world_x, world_y = self.screen_to_world(cursor_x, cursor_y)
        self.pan_x = _safe(cursor_x - world_x * proposed, self.pan_x)
        self.pan_y = _safe(cursor_y - world_y * proposed, self.pan_y)
        self.zoom = proposed

    def pan_to(self, x: float, y: float) -> None:
        self.pan_x = _safe(x, self.pan_x)
        self.pan_y = _safe(y, self.pan_y)

    def reset(self) -> None:
        self.zoom, self.pan_x, self.pan_y = 1.0, 0.0, 0.0

    def place_node(self, screen_x: float, screen_y: float, offset: float = 0.0) -> Tuple[int, int]:
        """Canvas position for a node dropped at a screen point (integer, never negative)."""
        world_x, world_y = self.screen_to_world(screen_x, screen_y)
        return (
            max(0, math.floor(_safe(world_x - offset))),
            max(0, math.floor(_safe(world_y - offset))),
        )
