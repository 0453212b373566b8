"""Claude Code binding.

Renders a role into Claude Code's file-based agent layout: one agent file
(frontmatter + body) plus a docs tree holding contexts, overlay contexts,
tasks, flows and the project config used for the build.
"""
from __future__ import annotations

import logging
import posixpath
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from jinja2 import Template, TemplateError, TemplateNotFound

from faber.core.concepts.models import BaseConcept, Role
from faber.core.config.models import Config
from faber.core.contexts import Context, ContextCategory, ContextResolver
from faber.core.errors import TemplateLoadError, UnsupportedConceptError
from faber.core.overlays import MergeStrategy, Overlays, merge_conflict
from faber.core.utils.io import dump_yaml_string
from faber.core.utils.text import create_environment, format_frontmatter, render_path_template

from .artifact import DeploymentArtifact, DeploymentMetadata, dedupe
from .base import BindingTransformer
from .models import BindingConfig

logger = logging.getLogger(__name__)

OVERLAY_NAMESPACE = "/.faber/overlays"
OVERLAY_DOCS_DIR = "_overlays"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def render_context_file(context: Context) -> str:
    """Context file content, with its frontmatter block restored if it had one."""
    if context.metadata is not None:
        return f"{format_frontmatter(context.metadata, exclude_none=False)}\n{context.content}"
    return context.content


class ClaudeCodeTransformer(BindingTransformer):
    """Transform roles for Claude Code.

    Args:
        binding: Loaded binding configuration
        conflict_strategy: When set, base contexts that share an identity with
            overlay contexts are rewritten by folding ``merge_conflict`` over
            the overlays in precedence order. Per-layer overlay files are
            written either way.
        clock: Timestamp source for artifact metadata
    """

    def __init__(
        self,
        binding: BindingConfig,
        *,
        conflict_strategy: Union[MergeStrategy, str, None] = None,
        clock: Clock = _utcnow,
    ) -> None:
        super().__init__(binding)
        self.conflict_strategy = MergeStrategy.parse(conflict_strategy) if conflict_strategy else None
        self._clock = clock
        self._resolver = ContextResolver()
        self._frontmatter = self._load_template(binding.templates.role_frontmatter)
        self._body = self._load_template(binding.templates.role_body)

    def _load_template(self, ref: str) -> Template:
        path = self.binding.template_path(ref)
        if not path.is_file():
            raise TemplateLoadError(f"Template not found for binding '{self.name}': {path}")
        env = create_environment(path.parent)
        try:
            return env.get_template(path.name)
        except TemplateNotFound as exc:
            raise TemplateLoadError(f"Template not found for binding '{self.name}': {path}") from exc
        except TemplateError as exc:
            raise TemplateLoadError(f"Failed to compile template {path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Transform
    # ------------------------------------------------------------------

    def transform(
        self,
        concept: BaseConcept,
        config: Config,
        overlays: Optional[Overlays] = None,
        platform: Optional[str] = None,
    ) -> DeploymentArtifact:
        if not isinstance(concept, Role) or not self.supports(concept):
            raise UnsupportedConceptError(
                f"Binding '{self.name}' cannot transform {concept.concept_type.value} concepts"
            )
        role = concept
        overlays = overlays if overlays is not None else Overlays.empty()
        platform = platform or self._resolver.detect_platform(role, config)

        files: Dict[str, str] = {}
        directories: List[str] = []

        def emit(path: str, content: str) -> None:
            files[path] = content
            directories.append(posixpath.dirname(path))

        values = self._path_values(role)
        structure = self.binding.output_structure
        docs = render_path_template(structure.docs_path, values)

        # 1. agent file
        view = self.build_view_model(role, config, overlays, platform)
        agent = f"{self._frontmatter.render(view)}\n{self._body.render(view)}"
        emit(render_path_template(structure.role_path, values), agent)

        # 2. base contexts (optionally folded with conflicting overlays)
        for ctx in self._resolved_base_contexts(role, overlays):
            emit(posixpath.join(docs, "contexts", ctx.category.value, f"{ctx.name}.md"), render_context_file(ctx))

        # 3. overlay contexts, one file per layer
        for layer, content in overlays.layers():
            for ctx in content.contexts:
                emit(
                    posixpath.join(docs, "contexts", OVERLAY_DOCS_DIR, layer, ctx.category.value, f"{ctx.name}.md"),
                    render_context_file(ctx),
                )

        # 4. tasks and flows
        for task in role.tasks.values():
            emit(posixpath.join(docs, "tasks", f"{task.name}.md"), task.content)
        for flow in role.flows.values():
            emit(posixpath.join(docs, "flows", f"{flow.name}.md"), flow.content)

        # 5. config
        emit(render_path_template(structure.config_path, values), dump_yaml_string(config.to_dict()))

        artifact = DeploymentArtifact(
            files=files,
            directories=dedupe(directories),
            metadata=DeploymentMetadata(
                concept=role.reference,
                binding=self.name,
                timestamp=self._clock(),
                config=config,
            ),
        )
        logger.debug(
            "Transformed role '%s' with binding '%s': %d files", role.name, self.name, len(files)
        )
        return artifact

    def _resolved_base_contexts(self, role: Role, overlays: Overlays) -> List[Context]:
        contexts = list(role.contexts.values())
        if self.conflict_strategy is None:
            return contexts

        overlay_contexts = [ctx for _, content in overlays.layers() for ctx in content.contexts]
        resolved: List[Context] = []
        for base in contexts:
            current = base
            for overlay in overlay_contexts:
                if overlay.key == base.key:
                    current = merge_conflict(current, overlay, self.conflict_strategy)
            if current is not base:
                logger.debug("Folded overlays into %s using %s", base.key, self.conflict_strategy.value)
            resolved.append(current)
        return resolved

    # ------------------------------------------------------------------
    # View model
    # ------------------------------------------------------------------

    def _path_values(self, role: Role) -> Dict[str, str]:
        meta = role.metadata
        return {"org": meta.org, "system": meta.system, "name": meta.name}

    def build_view_model(
        self,
        role: Role,
        config: Config,
        overlays: Overlays,
        platform: Optional[str],
    ) -> Dict[str, Any]:
        """Everything the agent templates can see."""
        values = self._path_values(role)
        prefixes = self.binding.path_resolution
        paths = {
            "context_prefix": render_path_template(prefixes.context_prefix, values),
            "task_prefix": render_path_template(prefixes.task_prefix, values),
            "flow_prefix": render_path_template(prefixes.flow_prefix, values),
        }

        grouped: Dict[str, List[Dict[str, Any]]] = {c.value: [] for c in ContextCategory}
        for ctx in role.contexts.values():
            grouped[ctx.category.value].append(
                {
                    "name": ctx.name,
                    "category": ctx.category.value,
                    "metadata": ctx.metadata,
                    "path": posixpath.join(paths["context_prefix"], ctx.category.value, f"{ctx.name}.md"),
                }
            )

        platform_context = self._resolver.platform_context(role.contexts, platform) if platform else None
        tasks = sorted(role.tasks.values(), key=lambda d: d.name)
        flows = sorted(role.flows.values(), key=lambda d: d.name)

        return {
            "metadata": role.metadata.raw,
            "prompt": role.prompt,
            "tasks": [self._document_view(d, paths["task_prefix"]) for d in tasks],
            "flows": [self._document_view(d, paths["flow_prefix"]) for d in flows],
            "context_categories": [c.value for c in ContextCategory],
            "contexts": grouped,
            "overlay_contexts": self.collect_overlay_contexts(overlays),
            "platform": platform,
            "platform_context": platform_context.to_dict() if platform_context else None,
            "mcp_servers": self.referenced_mcp_servers(role, config),
            "paths": paths,
            "binding": {"name": self.binding.name, "version": self.binding.version},
        }

    @staticmethod
    def _document_view(doc: Any, prefix: str) -> Dict[str, Any]:
        return {"name": doc.name, "content": doc.content, "path": posixpath.join(prefix, f"{doc.name}.md")}

    @staticmethod
    def collect_overlay_contexts(overlays: Overlays) -> List[Dict[str, Any]]:
        """Flatten overlay contexts with their ``/.faber/overlays/...`` paths."""
        return [
            {
                "name": ctx.name,
                "category": ctx.category.value,
                "content": ctx.content,
                "metadata": ctx.metadata,
                "layer": layer,
                "path": f"{OVERLAY_NAMESPACE}/{layer}/contexts/{ctx.category.value}/{ctx.name}.md",
            }
            for layer, content in overlays.layers()
            for ctx in content.contexts
        ]

    @staticmethod
    def referenced_mcp_servers(role: Role, config: Config) -> Optional[Dict[str, Dict[str, Any]]]:
        """MCP servers named by the role's contexts and configured for the project."""
        servers: Dict[str, Dict[str, Any]] = {}
        for ctx in role.contexts.values():
            name = ctx.mcp_server
            if name and name in config.mcp_servers:
                servers[name] = config.mcp_servers[name].to_dict()
        return servers or None


__all__ = ["ClaudeCodeTransformer", "render_context_file"]
