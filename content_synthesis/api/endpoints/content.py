"""
Content API endpoints.

This module provides generation, quality analysis and improvement of
single items, plus the batch improvement trigger.
"""

import logging
from datetime import datetime
from flask import Blueprint, jsonify, request, url_for

from ...core.models.content import (
    GenerationRequest, GenerationConstraints, ContentRecord, ContentKind, MediaGroup
)
from ...core.models.errors import ConfigurationError, ValidationError
from ...pipeline import slugs
from ...pipeline.facts import extract as extract_facts
from ...pipeline.listing import reconcile
from ..extensions import limiter, batch_limit, get_services, json_body, wants_async
from ..schemas import (
    GenerateContentSchema,
    AnalyzeContentSchema,
    ImproveContentSchema,
    ImproveBatchSchema,
    TaskAcceptedSchema
)


logger = logging.getLogger(__name__)

# Create blueprint
content_bp = Blueprint('content', __name__, url_prefix='/api/v1')

# Store each kind is persisted into
KIND_SOURCES = {
    'listing': 'listings',
    'article': 'articles',
    'qa': 'articles',
    'custom': 'articles',
}


def _store(services, source: str):
    if not services.content_stores:
        raise ConfigurationError("Supabase datastore is not configured", config_key="SUPABASE_URL")
    store = services.content_stores.get(source)
    if store is None:
        raise ValidationError(f"Unknown content source: {source}", field="source", value=source)
    return store


@content_bp.route('/content/generate', methods=['POST'])
def generate_content():
    """
    Generate one piece of content.

    Expected JSON body:
    {
        "kind": "listing | article | qa | custom",
        "context": {"topic": "...", ...},
        "target_word_count": 600,
        "locale": "tr-TR",
        "persist": false
    }
    """
    payload = GenerateContentSchema.model_validate(json_body())
    services = get_services()
    config = services.config
    kind = ContentKind(payload.kind).value

    context = dict(payload.context)
    folder = None
    facts = None
    if kind == ContentKind.LISTING.value:
        # Listings take their facts from the folder or topic name, like a batch item
        folder = str(context.get("folder") or context.get("topic") or "")
        facts = extract_facts(folder)
        context = {"folder": folder, "city": config.DEFAULT_CITY, **facts.present_fields(), **context}

    generation_request = GenerationRequest(
        kind=kind,
        context=context,
        constraints=GenerationConstraints(
            target_word_count=payload.target_word_count or config.DEFAULT_WORD_COUNT,
            locale=payload.locale or config.DEFAULT_LOCALE
        )
    )

    generated = services.router.generate(generation_request)
    body = generated.model_dump()

    if payload.persist:
        store = _store(services, KIND_SOURCES[kind])
        slug = slugs.ensure_unique(
            slugs.resolve(generated.title, config.SLUG_MAX_LENGTH),
            store.find_by_slug
        )
        if facts is not None:
            merged = reconcile(facts, generated.facts)
            record = services.synthesizer().build_record(
                generated, merged, MediaGroup(folder_key=folder), slug
            )
        else:
            record = ContentRecord(
                title=generated.title,
                slug=slug,
                body=generated.body,
                excerpt=generated.excerpt,
                meta_description=generated.meta_description,
                keywords=generated.keywords,
                category=kind
            )
        body["id"] = store.insert_record(record)
        body["slug"] = slug

    return jsonify(body), 201 if payload.persist else 200


@content_bp.route('/content/analyze', methods=['POST'])
def analyze_content():
    """
    Score content for human-likeness.

    Expected JSON body: {"content": "...", "title": "..."}
    """
    payload = AnalyzeContentSchema.model_validate(json_body())
    report = get_services().analyzer.analyze(payload.content, payload.title)
    return jsonify(report.model_dump(by_alias=True)), 200


@content_bp.route('/content/improve', methods=['POST'])
def improve_content():
    """
    Analyze and rewrite content without persisting anything.

    Expected JSON body: {"content": "...", "title": "..."}
    """
    payload = ImproveContentSchema.model_validate(json_body())
    services = get_services()

    analysis = services.analyzer.analyze(payload.content, payload.title)
    result = services.improver.improve(payload.content, payload.title, analysis)

    body = result.model_dump()
    body["applied"] = result.should_persist
    body["analysis"] = analysis.model_dump(by_alias=True)
    return jsonify(body), 200


@content_bp.route('/content/<source>/<item_id>/improve', methods=['POST'])
def improve_stored_content(source: str, item_id: str):
    """
    Improve one stored item; the rewrite is saved only when it scores higher.
    """
    services = get_services()
    store = _store(services, source)

    row = store.get(item_id)
    if row is None:
        return jsonify({
            "error": "not_found",
            "message": f"{source} item {item_id} not found",
            "status": 404
        }), 404

    content = row.get(store.body_field) or ""
    if not content.strip():
        raise ValidationError(f"{source} item {item_id} has no content to improve",
                              field=store.body_field)
    title = row.get(store.title_field) or "Untitled"

    analysis = services.analyzer.analyze(content, title)
    result = services.improver.improve(content, title, analysis)

    applied = result.should_persist
    if applied:
        store.update(item_id, {
            store.body_field: result.improved,
            "updated_at": datetime.utcnow().isoformat(),
        })
        logger.info(f"Saved improved {source} item {item_id}: "
                    f"{result.score.before} -> {result.score.after}")

    body = result.model_dump()
    body["applied"] = applied
    body["id"] = item_id
    body["source"] = source
    return jsonify(body), 200


@content_bp.route('/content/improve-batch', methods=['POST'])
@limiter.limit(batch_limit)
def improve_batch():
    """
    Improve stored content below a score threshold.

    Expected JSON body (all optional):
    {
        "sources": ["articles", "news", "listings"],
        "limit": 50,
        "min_score": 70,
        "dry_run": false
    }
    """
    data = request.get_json(silent=True) or {}
    payload = ImproveBatchSchema.model_validate(data)
    services = get_services()
    min_score = payload.min_score if payload.min_score is not None else services.config.IMPROVE_MIN_SCORE

    if wants_async():
        from ...tasks.batch import improve_content_batch_task

        task = improve_content_batch_task.delay(payload.sources, payload.limit, min_score, payload.dry_run)
        logger.info(f"Queued improvement batch as task {task.id}")
        return jsonify(TaskAcceptedSchema(
            task_id=task.id,
            status_url=url_for('tasks.task_status', task_id=task.id)
        ).model_dump()), 202

    if not services.content_stores:
        raise ConfigurationError("Supabase datastore is not configured", config_key="SUPABASE_URL")

    result = services.improvement_runner().run(
        sources=payload.sources,
        limit=payload.limit,
        min_score=min_score,
        dry_run=payload.dry_run
    )
    return jsonify(result.model_dump(mode='json')), 200
