"""
Chart of Accounts

The fixed two-level taxonomy every transaction is classified by:
a TransactionType (Income or Expense) and a category that must belong
to that type.

DESIGN DECISION: The chart is static configuration data. It never
changes at runtime, so it lives in code as enums plus an ordered
mapping. Category names are the Portuguese terms the merchants use.
"""

from enum import Enum
from typing import Iterator


class TransactionType(str, Enum):
    """Top-level classification of a transaction."""
    INCOME = "Income"
    EXPENSE = "Expense"


class IncomeCategory(str, Enum):
    """Sub-categories allowed for Income transactions."""
    PRODUCT_SALES = "Vendas de Produtos"
    CUSTOMER_PAID_SHIPPING = "Frete Pago pelo Cliente"
    FINANCIAL_INCOME = "Receitas Financeiras"
    OTHER_INCOME = "Outras Receitas"


class ExpenseCategory(str, Enum):
    """Sub-categories allowed for Expense transactions."""
    DIRECT_COSTS = "Custos Diretos"
    MERCHANDISE_PURCHASES = "Compra de Mercadorias"
    PACKAGING_AND_SUPPLIES = "Embalagens e Insumos"
    SHIPPING_AND_LOGISTICS = "Frete e Logística"
    MARKETPLACE_COMMISSIONS = "Comissões dos Marketplaces"
    PAYMENT_FEES = "Taxas de Pagamento"
    OPERATING_EXPENSES = "Despesas Operacionais"
    PLATFORMS_AND_TOOLS = "Plataformas e Ferramentas"
    MARKETING_AND_ADVERTISING = "Marketing e Publicidade"
    TAXES_AND_FEES = "Impostos e Taxas"
    EQUIPMENT_AND_MAINTENANCE = "Equipamentos e Manutenção"


# Ordered: the first entry is the default whenever the type changes.
CHART_OF_ACCOUNTS: dict[TransactionType, tuple[str, ...]] = {
    TransactionType.INCOME: tuple(c.value for c in IncomeCategory),
    TransactionType.EXPENSE: tuple(c.value for c in ExpenseCategory),
}

ACCOUNT_DESCRIPTIONS: dict[str, str] = {
    IncomeCategory.PRODUCT_SALES.value: "Valor recebido das plataformas",
    IncomeCategory.CUSTOMER_PAID_SHIPPING.value: "Quando o cliente arca com a entrega",
    IncomeCategory.FINANCIAL_INCOME.value: "Cashback, juros sobre saldo em conta",
    IncomeCategory.OTHER_INCOME.value: "Reembolsos e bônus promocionais",
    ExpenseCategory.DIRECT_COSTS.value: "Custos relacionados à venda",
    ExpenseCategory.MERCHANDISE_PURCHASES.value: "Custos com fornecedores e fabricação",
    ExpenseCategory.PACKAGING_AND_SUPPLIES.value: "Caixas, etiquetas, fitas, proteção",
    ExpenseCategory.SHIPPING_AND_LOGISTICS.value: "Custos com envio, coletas e transportadoras",
    ExpenseCategory.MARKETPLACE_COMMISSIONS.value: "Taxas cobradas pelos marketplaces",
    ExpenseCategory.PAYMENT_FEES.value: "Tarifas de antecipação, taxas do cartão e PIX",
    ExpenseCategory.OPERATING_EXPENSES.value: "Custos fixos e variáveis do negócio",
    ExpenseCategory.PLATFORMS_AND_TOOLS.value: "ERP, softwares, anúncios pagos",
    ExpenseCategory.MARKETING_AND_ADVERTISING.value: "Anúncios patrocinados, influencers",
    ExpenseCategory.TAXES_AND_FEES.value: "MEI, Simples Nacional, notas fiscais",
    ExpenseCategory.EQUIPMENT_AND_MAINTENANCE.value: "Computador, impressora, aluguel",
}


def categories_for(transaction_type: TransactionType) -> list[str]:
    """
    Ordered list of valid categories for a transaction type.

    Raises ValueError for a value that is not a TransactionType;
    that is a programming error, not something to recover from.
    """
    return list(CHART_OF_ACCOUNTS[TransactionType(transaction_type)])


def default_category(transaction_type: TransactionType) -> str:
    """First valid category for the type (used when the type changes)."""
    return categories_for(transaction_type)[0]


def is_valid_category(transaction_type: TransactionType, category: str) -> bool:
    """Check whether ``category`` belongs to ``transaction_type``."""
    return category in CHART_OF_ACCOUNTS[TransactionType(transaction_type)]


def chart_of_accounts_rows() -> Iterator[tuple[str, str, str]]:
    """Yield (type, category, description) rows in chart order."""
    for transaction_type, categories in CHART_OF_ACCOUNTS.items():
        for category in categories:
            yield transaction_type.value, category, ACCOUNT_DESCRIPTIONS[category]
