"""
Plain-text rendering of a TodoState for the terminal client.
"""

from client.state import TodoState


def render_summary(state: TodoState) -> str:
    if state.completed_count == state.total_count:
        return "🎉 All tasks completed! Great job!"
    left = state.remaining_count
    return f"💪 {left} task{'' if left == 1 else 's'} to go!"


def render_todos(state: TodoState) -> str:
    lines = ["✅ Todo Master", "Stay organized and get things done!"]

    if state.banner:
        lines.append(f"🔄 {state.banner}")

    if not state.todos:
        lines.append("")
        lines.append("🎯 No tasks yet!")
        lines.append("Create your first todo item to get started.")
        return "\n".join(lines)

    lines.append(f"{state.completed_count} completed | {state.remaining_count} remaining")
    lines.append("")
    for todo in state.todos:
        mark = "[x]" if todo['completed'] else "[ ]"
        created = todo['created_at'].astimezone().strftime('%Y-%m-%d') if todo.get('created_at') else "-"
        lines.append(f"{todo['id']:>4} {mark} {todo['title']}  (Created: {created})")

    lines.append("")
    lines.append(f"{render_summary(state)}  Progress: {state.progress_percent}%")
    return "\n".join(lines)
