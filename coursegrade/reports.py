"""LaTeX grade reports."""

import pathlib
import re
import textwrap
import typing

from .core import Course, GradeOptions
from . import aggregation, scales


def _tex_escape(text):
    # from: https://stackoverflow.com/questions/16259923/how-can-i-escape-latex-special-characters-inside-django-templates
    conv = {
        "&": r"\&",
        "%": r"\%",
        "$": r"\$",
        "#": r"\#",
        "_": r"\_",
        "{": r"\{",
        "}": r"\}",
        "~": r"\textasciitilde{}",
        "^": r"\^{}",
        "\\": r"\textbackslash{}",
        "<": r"\textless{}",
        ">": r"\textgreater{}",
    }
    regex = re.compile(
        "|".join(
            re.escape(str(key))
            for key in sorted(conv.keys(), key=lambda item: -len(item))
        )
    )
    return regex.sub(lambda match: conv[match.group()], text)


def _percent(number):
    if number is None:
        return "-"
    return rf"{scales.format_grade(number)}\%"


def _component_rows(component):
    grade = aggregation.component_grade(component)
    rows = []
    for i, sub in enumerate(component.sub_components):
        if i == 0:
            name = _tex_escape(component.name)
            weight = _percent(component.weight)
            total = _percent(grade)
        else:
            name = weight = total = ""

        sub_grade = "-" if sub.grade is None else rf"{sub.grade:g}\%"
        rows.append(
            f"{name} & {weight} & {_tex_escape(sub.name)} & {sub_grade} & {total} \\\\"
        )
    return rows


def _course_latex_report(course: Course, opts: GradeOptions):
    parts = []

    def _append(s):
        parts.append(textwrap.dedent(s))

    name = _tex_escape(course.name) if course.name else "Unnamed Course"
    _append(
        rf"""
        \section*{{{name}}}
    """
    )

    final = aggregation.authoritative_course_grade(course.components, opts)
    if final is not None:
        letter = scales.letter_grade(final, opts.scale)
        _append(
            rf"""
            \textbf{{Final Grade}}: {scales.format_grade(final)}\% ({letter})
        """
        )
    else:
        total = aggregation.total_weight(course.components)
        _append(
            rf"""
            \textit{{Weights total {total:0.1f}\% - must be 100\% for final grade}}
        """
        )

    if not course.components:
        return "\n".join(parts)

    _append(
        r"""
        \begin{tabular}{llllr}
            \textbf{Component} & \textbf{Weight} & \textbf{Sub-component} & \textbf{Grade} & \textbf{Component Grade} \\
            \hline
    """
    )

    for component in course.components:
        for row in _component_rows(component):
            parts.append("    " + row)

    _append(
        r"""
        \end{tabular}
    """
    )

    return "\n".join(parts)


def generate_latex(
    courses: typing.Sequence[Course],
    output_directory: typing.Union[str, pathlib.Path],
    opts: typing.Optional[GradeOptions] = None,
):
    """Generate a LaTeX grade report for a list of courses.

    Creates one file, `main.tex`, containing a section for each course with
    its final grade (or a note that the weights do not yet sum to 100) and a
    table of its components and their grades.

    Parameters
    ----------
    courses : Sequence[Course]
        The courses to report on.
    output_directory : Union[pathlib.Path, str]
        The directory where the report will be placed. Will be created if it
        does not already exist.
    opts : Optional[GradeOptions]
        Configures the weight check and the letter grade scale.

    Returns
    -------
    pathlib.Path
        The path of the written file.

    """
    if opts is None:
        opts = GradeOptions()

    output_directory = pathlib.Path(output_directory)

    head = textwrap.dedent(
        r"""
        \documentclass{article}
        \usepackage[margin=1in]{geometry}
        \pagestyle{empty}
        \setlength{\parindent}{0em}
        \begin{document}
        \begin{center}
            \textsc{Grade Report}
        \end{center}
    """
    )

    body = "\n".join(_course_latex_report(course, opts) for course in courses)

    tail = textwrap.dedent(
        r"""
        \end{document}
    """
    )

    output_directory.mkdir(exist_ok=True)
    path = output_directory / "main.tex"
    with path.open("w") as fileobj:
        fileobj.write(head + body + tail)

    return path
