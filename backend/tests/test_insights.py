# backend/tests/test_insights.py
from backend.app.services.insights import (
    DEFAULT_VISUALIZATIONS,
    build_insights_prompt,
    extract_visualizations,
    generate_insights,
)
from backend.app.services.profiling import analyze_table


def _summary():
    table = {
        "price": [10, 12, 15, None, 20],
        "sales": [100, 110, 150, 160, 210],
        "region": ["n", "s", "n", "e", "w"],
    }
    return analyze_table(table, file_name="shop.csv", dataset_id="shop")


def test_prompt_embeds_summary_facts():
    summary = _summary()
    prompt = build_insights_prompt(summary)

    assert "Dataset: shop.csv" in prompt
    assert "Total Rows: 5" in prompt
    assert "Columns (3): price (numeric), sales (numeric), region (string)" in prompt
    assert "price: 1 (20.0%)" in prompt
    s = summary.summary_stats["sales"]
    assert f"sales: mean={s.mean}, median={s.median}, std={s.std}, min={s.min}, max={s.max}" in prompt
    assert "Correlation Matrix: Available for 2 numeric columns" in prompt


def test_prompt_without_numeric_columns():
    summary = analyze_table({"name": ["a", "b"]}, file_name="names.csv")
    prompt = build_insights_prompt(summary)
    assert "Missing Values:\nNone" in prompt
    assert "No numeric columns" in prompt
    assert "Not available (insufficient numeric columns)" in prompt


def test_extract_visualizations():
    text = "Intro\n- A bar chart of region\n- Line plot over time\nNothing else"
    assert extract_visualizations(text) == ["- A bar chart of region", "- Line plot over time"]
    assert extract_visualizations("no suggestions here") == DEFAULT_VISUALIZATIONS


def test_generate_insights_stores_result(store, llm):
    summary = _summary()
    result = generate_insights(summary, llm, store)

    assert result["insights"] == llm.answer
    assert result["suggestedVisualizations"] == ["2. Use a scatter plot of price vs sales."]
    assert store.get_analysis_result("shop", "insights") == result

    messages = llm.calls[0]
    assert messages[0]["role"] == "system"
    assert "shop.csv" in messages[1]["content"]
