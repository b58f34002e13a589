"""Command-line interface for the employee directory."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterable

from pymongo.errors import OperationFailure, PyMongoError

from employee_directory.config import load_config
from employee_directory.domain.db import MongoConnection
from employee_directory.domain.errors import DirectoryError
from employee_directory.domain.models import (
    DeleteOutcome,
    DeleteResult,
    Employee,
    UpdateOutcome,
    UpdateResult,
)
from employee_directory.io.export_csv import export_employees_csv
from employee_directory.io.import_csv import import_employees_csv
from employee_directory.services.directory import EmployeeDirectoryService
from employee_directory.services.validation import split_skills


def format_employee(emp: Employee) -> str:
    skills = ", ".join(emp.skills) if emp.skills else "-"
    return (
        f"{emp.id} | {emp.name} <{emp.email}> | age {emp.age} | {emp.department} | "
        f"joined {emp.joining_date} | salary {emp.salary:.2f} | skills: {skills}"
    )


def _print_employees(employees: Iterable[Employee]) -> int:
    count = 0
    for emp in employees:
        print(f"  {format_employee(emp)}")
        count += 1
    if count == 0:
        print("  (no matching employees)")
    return count


def _print_update(result: UpdateResult) -> None:
    print("[INFO] Before update:")
    _print_employees(result.before)
    if result.outcome is UpdateOutcome.NOT_FOUND:
        print(f"[WARN] No employee found with email {result.email}")
    elif result.outcome is UpdateOutcome.UNCHANGED:
        print(f"[WARN] Employee {result.email} found but no changes were made")
    else:
        print(f"[OK] Employee {result.email} updated")
    print("[INFO] After update:")
    _print_employees(result.after)


def _print_delete(result: DeleteResult) -> None:
    if result.outcome is DeleteOutcome.DELETED:
        print(f"[OK] Deleted employee {result.key}")
    else:
        print(f"[WARN] No employee found for {result.key}")


def _print_stats(service: EmployeeDirectoryService) -> None:
    stats = service.department_stats()
    if not stats:
        print("  (no employees)")
    for row in stats:
        print(f"  {row.department or '(none)'}: {row.count}")


def _cmd_init_db(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    """Create the collection indexes."""
    names = service.ensure_indexes()
    print(f"[OK] Indexes ready: {', '.join(names)}")


def _cmd_add(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    emp = service.add(Employee(
        name=args.name,
        email=args.email,
        age=args.age,
        department=args.department,
        skills=split_skills(args.skills),
        joining_date=args.joining_date,
        salary=args.salary,
    ))
    print(f"[OK] Employee added with id {emp.id}")


def _cmd_update(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    _print_update(service.update(args.email, department=args.department, add_skills=args.add_skill))


def _cmd_delete(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    if args.id:
        _print_delete(service.delete_by_id(args.id))
    else:
        _print_delete(service.delete_by_email(args.email))


def _cmd_search(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    # --to only pairs with --from; the other criteria are exclusive in the parser
    if args.date_to is not None and args.date_from is None:
        raise SystemExit("--to needs --from")
    if args.name is not None:
        found = service.search_by_name(args.name, pattern=args.pattern)
    elif args.department is not None:
        found = service.search_by_department(args.department)
    elif args.skill is not None:
        found = service.search_by_skill(args.skill)
    elif args.date_from is not None and args.date_to is not None:
        found = service.search_by_joining_date_range(args.date_from, args.date_to)
    else:
        raise SystemExit("search needs exactly one of --name, --department, --skill or --from with --to")
    count = _print_employees(found)
    print(f"[INFO] {count} employees found")


def _cmd_list(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    page = service.list_employees(args.page, args.page_size, args.sort_by)
    print(f"[INFO] Page {page.page} (size {page.page_size}, sorted by {page.sort_field})")
    _print_employees(page.items)


def _cmd_stats(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    print("[INFO] Department statistics:")
    _print_stats(service)


def _cmd_import_csv(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    summary = import_employees_csv(service, args.path)
    print(f"[OK] Imported {summary.imported} employees, skipped {summary.skipped}, rejected {len(summary.rejected)}")


def _cmd_export_csv(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    count = export_employees_csv(service, args.path, sort_field=args.sort_by)
    print(f"[OK] Exported {count} employees to {args.path}")


def _cmd_menu(service: EmployeeDirectoryService, args: argparse.Namespace) -> None:
    run_menu(service)


MENU = """
1. Add Employee
2. Update Employee
3. Delete Employee
4. Search Employee
5. List Employees with Pagination
6. Department Stats
7. Exit"""


def _ask_int(input_fn: Callable[[str], str], prompt: str) -> int:
    while True:
        raw = input_fn(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            print(f"[ERROR] {raw!r} is not a whole number")


def _ask_float(input_fn: Callable[[str], str], prompt: str) -> float:
    while True:
        raw = input_fn(prompt).strip()
        try:
            return float(raw)
        except ValueError:
            print(f"[ERROR] {raw!r} is not a number")


def _menu_add(service: EmployeeDirectoryService, ask: Callable[[str], str]) -> None:
    emp = Employee(
        name=ask("Name: "),
        email=ask("Email: "),
        age=_ask_int(ask, "Age: "),
        department=ask("Department: "),
        skills=split_skills(ask("Skills (comma-separated): ")),
        joining_date=ask("Joining Date (YYYY-MM-DD): "),
        salary=_ask_float(ask, "Salary: "),
    )
    stored = service.add(emp)
    print(f"[OK] Employee added with id {stored.id}")


def _menu_update(service: EmployeeDirectoryService, ask: Callable[[str], str]) -> None:
    email = ask("Email to update: ")
    department = ask("New Department (blank to keep): ")
    skill = ask("New Skill to Add (blank for none): ")
    _print_update(service.update(email, department=department or None, add_skills=[skill]))


def _menu_delete(service: EmployeeDirectoryService, ask: Callable[[str], str]) -> None:
    how = _ask_int(ask, "Delete by: 1. Email  2. ID: ")
    if how == 1:
        _print_delete(service.delete_by_email(ask("Email: ")))
    elif how == 2:
        _print_delete(service.delete_by_id(ask("ID: ")))
    else:
        print("[WARN] Invalid choice")


def _menu_search(service: EmployeeDirectoryService, ask: Callable[[str], str]) -> None:
    how = _ask_int(ask, "Search by: 1. Name  2. Department  3. Skill  4. Joining Date Range: ")
    if how == 1:
        _print_employees(service.search_by_name(ask("Name Keyword: ")))
    elif how == 2:
        _print_employees(service.search_by_department(ask("Department: ")))
    elif how == 3:
        _print_employees(service.search_by_skill(ask("Skill: ")))
    elif how == 4:
        start = ask("From (YYYY-MM-DD): ")
        end = ask("To (YYYY-MM-DD): ")
        _print_employees(service.search_by_joining_date_range(start, end))
    else:
        print("[WARN] Invalid choice")


def _menu_list(service: EmployeeDirectoryService, ask: Callable[[str], str]) -> None:
    page_no = _ask_int(ask, "Page Number: ")
    sort_by = ask("Sort by (name/joiningDate): ") or "name"
    page = service.list_employees(page_no, sort_field=sort_by)
    _print_employees(page.items)


def _menu_stats(service: EmployeeDirectoryService, ask: Callable[[str], str]) -> None:
    print("[INFO] Department statistics:")
    _print_stats(service)


MENU_ACTIONS = {
    1: _menu_add,
    2: _menu_update,
    3: _menu_delete,
    4: _menu_search,
    5: _menu_list,
    6: _menu_stats,
}
EXIT_CHOICE = 7


def run_menu(service: EmployeeDirectoryService, input_fn: Callable[[str], str] = input) -> int:
    """
    Interactive numbered menu. Loops until Exit is chosen (or input ends).

    Directory and store errors are reported and the loop continues.
    """
    def ask(prompt: str) -> str:
        return input_fn(prompt).strip()

    while True:
        print(MENU)
        try:
            choice = _ask_int(ask, "Enter your choice: ")
        except EOFError:
            choice = EXIT_CHOICE

        if choice == EXIT_CHOICE:
            print("[INFO] Exiting the employee directory. Goodbye!")
            return 0

        action = MENU_ACTIONS.get(choice)
        if action is None:
            print("[WARN] Invalid choice. Try again.")
            continue

        try:
            action(service, ask)
        except DirectoryError as e:
            print(f"[ERROR] {e}")
        except PyMongoError as e:
            print(f"[ERROR] Database operation failed: {e}")
        except EOFError:
            print("[INFO] Input closed. Goodbye!")
            return 0


def _try_ensure_indexes(service: EmployeeDirectoryService) -> None:
    """
    Build indexes before a command, but let the command run if they cannot be built.

    A collection that already holds duplicate emails rejects the unique index;
    delete and search must still work so the duplicates can be removed.
    """
    try:
        service.ensure_indexes()
    except OperationFailure as e:
        print(f"[WARN] Could not build indexes, email uniqueness is not enforced: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="employee-directory",
        description="Employee directory backed by MongoDB",
    )
    parser.add_argument("--config", help="Path to config YAML/JSON (optional)")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Create collection indexes")
    init.set_defaults(func=_cmd_init_db)

    add = sub.add_parser("add", help="Add an employee")
    add.add_argument("--name", required=True)
    add.add_argument("--email", required=True)
    add.add_argument("--age", type=int, required=True)
    add.add_argument("--department", required=True)
    add.add_argument("--skills", default="", help="Comma-separated skills")
    add.add_argument("--joining-date", required=True, help="YYYY-MM-DD")
    add.add_argument("--salary", type=float, required=True)
    add.set_defaults(func=_cmd_add)

    upd = sub.add_parser("update", help="Change department and/or add skills")
    upd.add_argument("--email", required=True)
    upd.add_argument("--department", help="New department")
    upd.add_argument("--add-skill", action="append", default=[], help="Skill to add (repeatable)")
    upd.set_defaults(func=_cmd_update)

    dele = sub.add_parser("delete", help="Delete an employee by email or id")
    key = dele.add_mutually_exclusive_group(required=True)
    key.add_argument("--email")
    key.add_argument("--id")
    dele.set_defaults(func=_cmd_delete)

    search = sub.add_parser("search", help="Search employees")
    criterion = search.add_mutually_exclusive_group(required=True)
    criterion.add_argument("--name", help="Case-insensitive name keyword")
    criterion.add_argument("--department")
    criterion.add_argument("--skill")
    criterion.add_argument("--from", dest="date_from", help="Joining date lower bound (YYYY-MM-DD)")
    search.add_argument("--pattern", action="store_true", help="Treat --name as a regular expression")
    search.add_argument("--to", dest="date_to", help="Joining date upper bound (YYYY-MM-DD)")
    search.set_defaults(func=_cmd_search)

    lst = sub.add_parser("list", help="List employees with pagination")
    lst.add_argument("--page", type=int, default=1)
    lst.add_argument("--page-size", type=int, help="Defaults to page_size from config")
    lst.add_argument("--sort-by", default="name")
    lst.set_defaults(func=_cmd_list)

    stats = sub.add_parser("stats", help="Employee count per department")
    stats.set_defaults(func=_cmd_stats)

    imp = sub.add_parser("import-csv", help="Import employees from CSV")
    imp.add_argument("path")
    imp.set_defaults(func=_cmd_import_csv)

    exp = sub.add_parser("export-csv", help="Export employees to CSV")
    exp.add_argument("path")
    exp.add_argument("--sort-by", default="name")
    exp.set_defaults(func=_cmd_export_csv)

    menu = sub.add_parser("menu", help="Interactive menu")
    menu.set_defaults(func=_cmd_menu)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)

    with MongoConnection.from_config(cfg) as connection:
        try:
            service = EmployeeDirectoryService(connection, cfg.collection, page_size=cfg.page_size)
            if args.func is not _cmd_init_db:
                _try_ensure_indexes(service)
            args.func(service, args)
        except DirectoryError as e:
            print(f"[ERROR] {e}")
            return 1
        except PyMongoError as e:
            print(f"[ERROR] Database operation failed: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
