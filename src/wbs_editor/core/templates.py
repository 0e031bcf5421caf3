"""built-in trees: the default micro-reactor wbs and a blank project.

every top-level section is split into the same six disciplines, and each
discipline holds the work packages whose keys start with its prefix. the
content is in portuguese, like the command grammar in `parser.py`.
"""

from __future__ import annotations

from typing import Optional

from .tree import ROOT_KEY, WbsNode


# --- configuration ---

DEFAULT_PROJECT = "Microrreator Nuclear"
PROJECT_PREFIX = "PROJETO: "
BLANK_TITLE = "(sem título)"

COLORS = {
    "root_bg": "#1E3A8A",
    "root_fg": "#FFFFFF",
    "uc_bg": "#C7D2FE",
    "udt2_bg": "#BBF7D0",
    "udt3_bg": "#FEF9C3",
    "spc_bg": "#FCA5A5",
    "mr_bg": "#DDD6FE",
    "mat_bg": "#FED7AA",
    "sus_bg": "#A7F3D0",
    "qms_bg": "#E5E7EB",
}

# suffix -> discipline name, in display order
DISCIPLINES: dict[str, str] = {
    "A": "Aquisição",
    "P": "Projeto",
    "C": "Construção",
    "L": "Licenciamento",
    "M": "Montagem",
    "K": "Comissionamento",
}


# (key, label, color, work packages)
_SECTIONS: list[tuple[str, str, str, list[tuple[str, str]]]] = [
    ("1", "1 Unidade Crítica (UCRI) (UDT-1)", "uc_bg", [
        ("1.A.1", "Aquisições da UCri (equipamentos, instrumentos, serviços)"),
        ("1.P.1", "Projetos: neutrônico, mecânico, vareta combustível, I&C"),
        ("1.P.2", "Planejamento e especificação das rotinas experimentais da UCri"),
        ("1.C.1", "Adequações físicas mínimas / infraestrutura de apoio à UCri"),
        ("1.L.1", "Submissão e aprovação das rotinas experimentais junto à Autoridade Nuclear (AN)"),
        ("1.M.1", "Montagem/instalação de instrumentos e arranjos de ensaio da UCri"),
        ("1.K.1", "Execução das rotinas experimentais e registros de comissionamento da UCri"),
    ]),
    ("2", "2 Bancadas Experimentais da UDT-2 (Efeito Separado) (UDT-2)", "udt2_bg", [
        ("2.A.1", "Aquisição de equipamentos, instrumentos, componentes e materiais (UDT-2)"),
        ("2.P.1", "Projetos: mecânico, I&C, proteção das bancadas de efeito separado"),
        ("2.P.2", "Preparação/planejamento de rotinas experimentais (UDT-2)"),
        ("2.C.1", "Construção das bancadas de efeito separado (UDT-2)"),
        ("2.L.1", "Submissão e aprovação das rotinas junto à AN (UDT-2)"),
        ("2.M.1", "Montagem e integração dos sistemas das bancadas (UDT-2)"),
        ("2.K.1", "Comissionamento e execução dos experimentos de efeito separado (UDT-2)"),
    ]),
    ("3", "3 Bancadas Experimentais da UDT-3 (Efeito Integrado) (UDT-3)", "udt3_bg", [
        ("3.A.1", "Aquisição de equipamentos/instrumentos para efeito integrado (UDT-3)"),
        ("3.P.1", "Projetos da bancada de transferência de calor: mecânico, I&C, proteção"),
        ("3.P.2", "Planejamento/roteiros experimentais (UDT-3)"),
        ("3.C.1", "Construção das bancadas de efeito integrado (UDT-3)"),
        ("3.L.1", "Submissão e aprovação das rotinas junto à AN (UDT-3)"),
        ("3.M.1", "Montagem e integração dos sistemas das bancadas (UDT-3)"),
        ("3.K.1", "Comissionamento e execução dos experimentos de efeito integrado (UDT-3)"),
    ]),
    ("4", "4 Sistema de Proteção e Controle e Supervisão Remota (UDT-4)", "spc_bg", [
        ("4.A.1", "Aquisições para o sistema de proteção/controle e supervisão remota"),
        ("4.P.1", "Projeto do sistema de proteção e controle da UCri"),
        ("4.P.2", "Concepção do sistema de supervisão remota para micro-redes com fontes renováveis"),
        ("4.C.1", "Desenvolvimento/integração de hardware e software de proteção/controle"),
        ("4.L.1", "Evidências/relatórios para licenciamento dos sistemas de proteção/controle"),
        ("4.M.1", "Montagem/instalação e integração do sistema à mesa de controle"),
        ("4.K.1", "Testes e comissionamento do sistema de proteção/controle e supervisão remota"),
    ]),
    ("5", "5 Microrreator e Análises Estruturais (DRBC)", "mr_bg", [
        ("5.A.1", "Aquisições para blindagem/contenção e ensaios"),
        ("5.P.1", "Projeto de blindagem (gama/nêutrons) do microrreator"),
        ("5.P.2", "Projeto mecânico e instrumentação da contenção"),
        ("5.P.3", "Análise termo-estrutural do microrreator em cenários operacionais"),
        ("5.C.1", "Protótipos/maquetes e preparações para ensaios estruturais"),
        ("5.L.1", "Evidências técnicas de segurança para licenciamento"),
        ("5.M.1", "Montagem de arranjos e instrumentação para validações"),
        ("5.K.1", "Testes de aceitação/validação termo-estrutural"),
    ]),
    ("6", "6 Desenvolvimento dos Processos de Materiais (DMAT)", "mat_bg", [
        ("6.A.1", "Aquisição de equipamentos/serviços/consumíveis para heat pipes"),
        ("6.P.1", "Desenvolvimento de materiais: BeO, grafita e B4C nuclearmente puro"),
        ("6.P.2", "Desenvolvimento de heat pipes aplicáveis a microrreatores"),
        ("6.P.3", "Desenvolvimento de pastilhas de UO2 até 20 mm"),
        ("6.C.1", "Montagem de linhas piloto e dispositivos de processo"),
        ("6.L.1", "Autorizações e controles regulatórios para materiais nucleares"),
        ("6.M.1", "Montagem/integração de equipamentos de processo (DMAT)"),
        ("6.K.1", "Comissionamento/qualificação de processo de materiais (DMAT)"),
    ]),
    ("7", "7 Inserção e Sustentabilidade Socioambiental (SUST)", "sus_bg", [
        ("7.A.1", "Aquisições para estudos/dados de inserção e sustentabilidade"),
        ("7.P.1", "Inserção na rede elétrica e em cidades pequenas; planejamento de distribuição"),
        ("7.P.2", "Inserção em indústrias intensivas em eletricidade e estações de recarga"),
        ("7.P.3", "Interação com fontes renováveis e qualidade de energia"),
        ("7.P.4", "Avaliação de sustentabilidade socioambiental e econômica"),
        ("7.P.5", "Contribuição dos microrreatores para redução de rejeitos de longa duração"),
        ("7.C.1", "Infraestruturas mínimas para pilotos/demonstrações"),
        ("7.L.1", "Estudos/relatórios para interfaces regulatórias e socioambientais"),
        ("7.M.1", "Preparação logística/instalação de pilotos"),
        ("7.K.1", "Comissionamento/validação de pilotos"),
    ]),
    ("8", "8 Sistema de Garantia da Qualidade (SGQ)", "qms_bg", [
        ("8.A.1", "Ferramentas/serviços de gestão documental (GED)"),
        ("8.P.1", "Implementação do Sistema de Qualidade (planos e procedimentos)"),
        ("8.P.2", "Estruturação do arquivo técnico dos parceiros"),
        ("8.C.1", "Implantação de rotinas de controle, registros e indicadores"),
        ("8.L.1", "Relatórios ao regulador, auditorias e verificações de conformidade"),
        ("8.M.1", "Organização inicial do repositório e taxonomia documental"),
        ("8.K.1", "Encerramento documental e lições aprendidas"),
    ]),
]


def discipline_nodes(prefix: str, packages: list[WbsNode]) -> list[WbsNode]:
    """build the six discipline branches of a section, sorting packages into them."""
    return [
        WbsNode(
            key=f"{prefix}.{suffix}",
            label=f"{prefix}.{suffix} {name}",
            children=[p for p in packages if p.key.startswith(f"{prefix}.{suffix}.")],
        )
        for suffix, name in DISCIPLINES.items()
    ]


def initial_tree(description: Optional[str] = None) -> WbsNode:
    """the default project tree, freshly built on every call."""
    sections = []
    for key, label, color, packages in _SECTIONS:
        leaves = [WbsNode(key=k, label=f"{k} {text}", docs=[]) for k, text in packages]
        sections.append(
            WbsNode(key=key, label=label, bg=COLORS[color], children=discipline_nodes(key, leaves))
        )
    return WbsNode(
        key=ROOT_KEY,
        label=PROJECT_PREFIX + (description or DEFAULT_PROJECT),
        bg=COLORS["root_bg"],
        fg=COLORS["root_fg"],
        children=sections,
    )


def blank_tree() -> WbsNode:
    """an empty project: just the root."""
    return WbsNode(
        key=ROOT_KEY,
        label=PROJECT_PREFIX + BLANK_TITLE,
        bg=COLORS["root_bg"],
        fg=COLORS["root_fg"],
        children=[],
    )
