"""
Streamlit Frontend for Merchant Ledger

The single page a merchant keeps open during the day:
1. Headline totals and day-by-day bars for expenses, revenue and net income,
   each with its own window selector
2. Current-month balance and composition pie charts
3. The transaction table with add / edit / delete
4. Spreadsheet import and export

The Dashboard object lives in st.session_state, so each browser session
gets its own in-memory store seeded with sample data.
"""

from datetime import datetime
from decimal import Decimal

import altair as alt
import streamlit as st

from ledger.dashboard import Dashboard, create_dashboard
from ledger.models import (
    ChartKind,
    CompositionSlice,
    DateWindow,
    DayBucket,
    TransactionType,
    categories_for,
    chart_of_accounts_rows,
)
from ledger.reports import format_currency, format_share
from ledger.reports.palette import (
    EXPENSE_BAR_COLOR,
    NET_NEGATIVE_BAR_COLOR,
    NET_POSITIVE_BAR_COLOR,
    REVENUE_BAR_COLOR,
)
from ledger.services.spreadsheet import SpreadsheetError


# Page configuration
st.set_page_config(
    page_title="Controle Financeiro do Lojista",
    page_icon="💰",
    layout="wide",
)

st.markdown("""
<style>
    .big-number {
        font-size: 2em;
        font-weight: bold;
    }
    .positive { color: #16a34a; }
    .negative { color: #dc2626; }
    .revenue { color: #2563eb; }
</style>
""", unsafe_allow_html=True)


CHART_TITLES = {
    ChartKind.EXPENSE: "Despesas Dia a Dia",
    ChartKind.REVENUE: "Receita Geral",
    ChartKind.NET_INCOME: "Receita Líquida",
}


def get_dashboard() -> Dashboard:
    """Get or create this session's dashboard."""
    if "dashboard" not in st.session_state:
        st.session_state.dashboard = create_dashboard()
    return st.session_state.dashboard


def main():
    """Main application entry point."""
    dashboard = get_dashboard()

    render_header(dashboard)
    render_window_charts(dashboard)
    render_month_overview(dashboard)
    st.markdown("---")
    render_transactions(dashboard)
    st.markdown("---")
    render_spreadsheet_tools(dashboard)


def render_header(dashboard: Dashboard):
    left, right = st.columns([3, 1])
    with left:
        st.title("Controle Financeiro do Lojista")
        last_update = dashboard.snapshot().last_update
        if last_update:
            st.caption(f"Última atualização: {last_update.strftime('%d/%m/%Y')}")
    with right:
        st.caption(datetime.now().strftime("%d/%m/%Y %H:%M:%S"))


# =============================================================================
# CHARTS
# =============================================================================

def _bar_chart(buckets: list[DayBucket], color) -> alt.Chart:
    rows = [{"Day": bucket.label, "Value": float(bucket.value)} for bucket in buckets]
    order = [bucket.label for bucket in buckets]
    return (
        alt.Chart(alt.Data(values=rows))
        .mark_bar()
        .encode(
            x=alt.X("Day:N", sort=order, title=None),
            y=alt.Y("Value:Q", title=None),
            color=color,
            tooltip=["Day:N", alt.Tooltip("Value:Q", format=",.2f")],
        )
        .properties(height=300)
    )


def _pie_chart(slices: list[CompositionSlice]) -> alt.Chart:
    rows = [
        {
            "Name": s.name,
            "Value": float(s.value),
            "Amount": format_currency(s.value),
            "Share": format_share(s.share, decimals=1),
        }
        for s in slices
    ]
    return (
        alt.Chart(alt.Data(values=rows))
        .mark_arc(outerRadius=110)
        .encode(
            theta="Value:Q",
            color=alt.Color(
                "Name:N",
                scale=alt.Scale(
                    domain=[s.name for s in slices],
                    range=[s.color for s in slices],
                ),
                legend=alt.Legend(orient="bottom", title=None),
            ),
            tooltip=["Name:N", "Amount:N", "Share:N"],
        )
        .properties(height=300)
    )


def render_window_charts(dashboard: Dashboard):
    """Three charts, each with an independent window selector."""
    windows = list(DateWindow)
    columns = dict(zip(ChartKind, st.columns(3)))

    # Selectors first: the snapshot depends on all three
    for chart, column in columns.items():
        with column:
            st.subheader(CHART_TITLES[chart])
            selected = st.radio(
                "Period",
                options=windows,
                index=windows.index(dashboard.window(chart)),
                format_func=lambda w: w.value,
                horizontal=True,
                key=f"window_{chart.value}",
                label_visibility="collapsed",
            )
            dashboard.set_window(chart, selected)

    snapshot = dashboard.snapshot()
    summaries = {
        ChartKind.EXPENSE: (snapshot.expenses, "negative", alt.value(EXPENSE_BAR_COLOR)),
        ChartKind.REVENUE: (snapshot.revenue, "revenue", alt.value(REVENUE_BAR_COLOR)),
        ChartKind.NET_INCOME: (
            snapshot.net_income,
            "positive" if snapshot.net_income.total >= 0 else "negative",
            alt.condition(
                alt.datum.Value >= 0,
                alt.value(NET_POSITIVE_BAR_COLOR),
                alt.value(NET_NEGATIVE_BAR_COLOR),
            ),
        ),
    }

    for chart, column in columns.items():
        summary, css_class, color = summaries[chart]
        with column:
            st.markdown(
                f'<div class="big-number {css_class}">{format_currency(summary.total)}</div>',
                unsafe_allow_html=True,
            )
            if summary.buckets:
                st.altair_chart(_bar_chart(summary.buckets, color), use_container_width=True)
            else:
                st.info("Nenhum lançamento no período.")


def render_month_overview(dashboard: Dashboard):
    """Balance and composition for the current calendar month."""
    snapshot = dashboard.snapshot()
    balance_col, type_col, category_col = st.columns(3)

    with balance_col:
        st.subheader("Seu Saldo do Mês Atual")
        balance = snapshot.current_month_net_income
        css_class = "positive" if balance >= 0 else "negative"
        st.markdown(
            f'<div class="big-number {css_class}">{format_currency(balance)}</div>',
            unsafe_allow_html=True,
        )

    with type_col:
        st.subheader("Entradas e Saídas (mês atual)")
        if snapshot.type_composition:
            st.altair_chart(_pie_chart(snapshot.type_composition), use_container_width=True)
        else:
            st.info("Nenhum lançamento neste mês.")

    with category_col:
        st.subheader("Despesas e Receitas (mês atual)")
        if snapshot.category_composition:
            st.altair_chart(_pie_chart(snapshot.category_composition), use_container_width=True)
        else:
            st.info("Nenhum lançamento neste mês.")


# =============================================================================
# TRANSACTION TABLE
# =============================================================================

def render_transactions(dashboard: Dashboard):
    st.header("Extrato de Movimentações")

    if st.button("➕ Nova movimentação"):
        dashboard.add_blank_transaction()
        st.rerun()

    transactions = dashboard.transactions()
    if not transactions:
        st.info("Nenhuma movimentação registrada.")
        return

    st.dataframe(
        [
            {
                "Data": t.date_label,
                "Tipo": t.type.value,
                "Categoria": t.category,
                "Descrição": t.description or "",
                "Lojista": t.merchant_name,
                "Valor": format_currency(t.amount),
            }
            for t in transactions
        ],
        use_container_width=True,
        hide_index=True,
    )

    render_editor(dashboard, [t.id for t in transactions])


def render_editor(dashboard: Dashboard, transaction_ids: list[str]):
    """Edit or delete one transaction."""
    with st.expander("✏️ Editar movimentação"):
        selected_id = st.selectbox(
            "Movimentação",
            options=transaction_ids,
            format_func=lambda i: _describe(dashboard, i),
        )
        transaction = dashboard.store.get(selected_id)
        if transaction is None:
            return

        types = list(TransactionType)
        new_type = st.selectbox(
            "Tipo",
            options=types,
            index=types.index(transaction.type),
            format_func=lambda t: t.value,
            key=f"type_{transaction.id}",
        )
        if new_type != transaction.type:
            # Category resets to the first option of the new type
            dashboard.change_type(transaction.id, new_type)
            st.rerun()

        categories = categories_for(transaction.type)
        with st.form(key=f"edit_{transaction.id}"):
            category = st.selectbox(
                "Categoria",
                options=categories,
                index=categories.index(transaction.category)
                if transaction.category in categories else 0,
            )
            description = st.text_input("Descrição", value=transaction.description or "")
            entry_date = st.date_input("Data", value=transaction.date, format="DD/MM/YYYY")
            amount = st.number_input(
                "Valor (R$)",
                value=float(transaction.amount),
                min_value=0.0,
                step=0.01,
                format="%.2f",
            )
            save_col, delete_col = st.columns(2)
            save = save_col.form_submit_button("✅ Salvar", type="primary")
            delete = delete_col.form_submit_button("🗑️ Excluir")

        if delete:
            dashboard.remove_transaction(transaction.id)
            st.rerun()

        if save:
            updated = transaction.model_copy(update={
                "category": category,
                "description": description.strip() or None,
                "date": entry_date,
                "amount": Decimal(str(round(amount, 2))),
            })
            result = dashboard.validator.validate(updated)
            if result.has_errors:
                st.error(dashboard.validator.get_user_friendly_summary(result))
            else:
                dashboard.update_transaction(updated)
                st.rerun()


def _describe(dashboard: Dashboard, transaction_id: str) -> str:
    t = dashboard.store.get(transaction_id)
    if t is None:
        return transaction_id
    return f"{t.date_label} · {t.category} · {format_currency(t.amount)}"


# =============================================================================
# SPREADSHEETS
# =============================================================================

def render_spreadsheet_tools(dashboard: Dashboard):
    st.header("Planilhas")
    with st.expander("📖 Plano de Contas"):
        st.dataframe(
            [
                {"Tipo": t, "Categoria": category, "Descrição": description}
                for t, category, description in chart_of_accounts_rows()
            ],
            use_container_width=True,
            hide_index=True,
        )

    export_col, chart_col, import_col = st.columns(3)

    with export_col:
        st.download_button(
            "⬇️ Exportar movimentações",
            data=dashboard.export_spreadsheet(),
            file_name="transactions.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    with chart_col:
        st.download_button(
            "⬇️ Plano de Contas",
            data=dashboard.export_chart_of_accounts(),
            file_name="plano-de-contas.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    with import_col:
        uploaded = st.file_uploader(
            "Importar planilha",
            type=["xlsx"],
            help="Somente arquivos .xlsx; planilhas .xls antigas precisam ser salvas como .xlsx.",
        )
        if uploaded and st.button("⬆️ Importar"):
            try:
                result = dashboard.import_spreadsheet(uploaded.getvalue())
            except SpreadsheetError as e:
                st.error(f"Não foi possível ler a planilha: {e}")
                return

            st.success(f"{result.accepted_count} movimentações importadas.")
            if result.has_skips:
                st.warning(f"{result.skipped_count} linhas ignoradas:")
                for skipped in result.skipped:
                    st.markdown(f"- Linha {skipped.row_number}: {skipped.reason}")


if __name__ == "__main__":
    main()
