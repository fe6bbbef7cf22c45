"""Discord embed builders for bot responses."""

import discord
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from utils.formatters import format_list, format_time, format_win_rate

if TYPE_CHECKING:
    from game.gameboard import GameBoard


def create_duel_request_embed(
    inviter: discord.Member,
    invited: discord.Member,
    expire_time: int,
    reactions: List[str],
    color: int
) -> discord.Embed:
    """Create embed for a pending duel request."""
    embed = discord.Embed(
        title="⚔️ Tic-Tac-Toe Duel!",
        description=f"{inviter.mention} challenges {invited.mention} to a game of tic-tac-toe!",
        color=color
    )
    embed.add_field(
        name="How to answer",
        value=f"{reactions[0]} to accept, {reactions[1]} to decline",
        inline=False
    )
    embed.set_footer(text=f"This request expires in {format_time(expire_time)}.")
    return embed


def create_gameboard_embed(gameboard: "GameBoard") -> discord.Embed:
    """Create embed showing whose turn it is, or the result."""
    first, second = gameboard.entities
    embed = discord.Embed(
        title="🎮 Tic-Tac-Toe",
        color=gameboard.config.embed_color
    )
    embed.add_field(
        name="Players",
        value=(
            f"{gameboard.emoji_for(0)} {first.mention}\n"
            f"{gameboard.emoji_for(1)} {second.mention}"
        ),
        inline=False
    )

    result = gameboard.winner_label()
    if result:
        embed.description = result
    else:
        current = gameboard.board.current_player
        embed.description = (
            f"It's {gameboard.current_entity.mention}'s turn {gameboard.emoji_for(current)}"
        )
        embed.set_footer(text=f"The game expires after {format_time(gameboard.expire_time)} without a move.")
    return embed


def create_channel_status_embed(gameboards: Sequence["GameBoard"], channel_name: str) -> discord.Embed:
    """Create embed listing the games running in a channel."""
    embed = discord.Embed(
        title=f"🎮 Games in #{channel_name}",
        color=discord.Color.blue()
    )
    if not gameboards:
        embed.description = "No game in progress. Start one with `/tictactoe`!"
        return embed

    lines = [
        format_list([entity.mention for entity in gameboard.entities], last_separator=" vs ")
        for gameboard in gameboards
    ]
    embed.description = "\n".join(f"• {line}" for line in lines)
    return embed


def create_stats_embed(member: discord.Member, stats: Dict) -> discord.Embed:
    """Create embed with a member's results."""
    embed = discord.Embed(
        title=f"📊 {member.display_name}'s Statistics",
        color=discord.Color.blue()
    )
    games = stats['wins'] + stats['losses'] + stats['ties']
    embed.add_field(
        name="Results",
        value=(
            f"**Games:** {games}\n"
            f"**Wins:** {stats['wins']}\n"
            f"**Losses:** {stats['losses']}\n"
            f"**Ties:** {stats['ties']}\n"
            f"**Win Rate:** {format_win_rate(stats['wins'], games)}"
        ),
        inline=False
    )
    embed.set_footer(text=f"Last played: {stats.get('last_played') or 'Never'}")
    return embed


def create_leaderboard_embed(entries: List[Dict], title: Optional[str] = None) -> discord.Embed:
    """Create leaderboard embed."""
    embed = discord.Embed(
        title=title or "🏆 Tic-Tac-Toe Leaderboard",
        color=discord.Color.gold()
    )

    if not entries:
        embed.description = "No games played yet!"
        return embed

    medals = ["🥇", "🥈", "🥉"]
    lines = []
    for i, entry in enumerate(entries):
        rank = medals[i] if i < len(medals) else f"**{i + 1}.**"
        lines.append(
            f"{rank} {entry['username']} - {entry['wins']} wins "
            f"({entry['losses']} losses, {entry['ties']} ties)"
        )
    embed.description = "\n".join(lines)
    return embed
