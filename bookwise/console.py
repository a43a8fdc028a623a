"""Terminal rendering of the week grid, slot lists, and requests."""

from bookwise.scheduling.calendar_view import CellState, DayAction, WeekGrid
from bookwise.schemas.appointment_schema import Appointment
from bookwise.schemas.customer_schema import CustomerUpdateRequest

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

CELL_WIDTH = 14


def _cell(text: str, color: str = "", use_color: bool = True) -> str:
    text = text[:CELL_WIDTH].ljust(CELL_WIDTH)
    return f"{color}{text}{RESET}" if use_color and color else text


def render_week(grid: WeekGrid, use_color: bool = True) -> str:
    """Render a week as a fixed-width text table, one column per day."""
    lines = [f"{BOLD}{grid.title}{RESET}" if use_color else grid.title, ""]

    header = []
    actions = []
    for column in grid.columns:
        label = column.day.strftime("%a %d")
        if column.is_today:
            label += " *"
        header.append(_cell(label, BLUE if column.is_today else BOLD, use_color))
        if column.action == DayAction.UNBLOCK:
            actions.append(_cell("[unblock day]", RED, use_color))
        else:
            actions.append(_cell("[block day]", DIM, use_color))
    lines.append(" ".join(header))
    lines.append(" ".join(actions))

    rows = len(grid.columns[0].cells) if grid.columns else 0
    for i in range(rows):
        row = []
        for column in grid.columns:
            cell = column.cells[i]
            if cell.state == CellState.BOOKED:
                row.append(_cell(f"{cell.label} {cell.appointment.customer_name}",
                                 GREEN, use_color))
            elif cell.state == CellState.BLOCKED:
                row.append(_cell(f"{cell.label} Blocked", YELLOW, use_color))
            else:
                row.append(_cell(cell.label, DIM, use_color))
        lines.append(" ".join(row))
    return "\n".join(lines)


def render_slots(labels: list[str]) -> str:
    if not labels:
        return "There are no available time slots for this day. Please select another date."
    return "  ".join(labels)


def render_appointment(appointment: Appointment) -> str:
    when = appointment.date_time.strftime("%Y-%m-%d %H:%M")
    if appointment.is_blocked:
        return f"{appointment.id}  {when}  (blocked)"
    return f"{appointment.id}  {when}  {appointment.customer_name} <{appointment.email}>"


def render_request(request: CustomerUpdateRequest) -> str:
    lines = [f"{request.id}  {request.current_data.name}  [{request.status.value}]"]
    changes = request.requested_data
    if changes.name and changes.name != request.current_data.name:
        lines.append(f"    Name: {request.current_data.name} -> {changes.name}")
    if changes.email and changes.email != request.current_data.email:
        lines.append(f"    Email: {request.current_data.email} -> {changes.email}")
    return "\n".join(lines)
